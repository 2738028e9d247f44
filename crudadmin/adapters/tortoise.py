# -*- coding: utf-8 -*-
"""
tortoise

Tortoise ORM implementation of the model manager, datagrid and query
collaborators.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from tortoise import fields
from tortoise.models import Model
from tortoise.queryset import QuerySet

from ..core.show import FieldDescription

logger = logging.getLogger(__name__)


FIELD_TYPES: tuple[tuple[type[Any], str], ...] = (
    (fields.BooleanField, "boolean"),
    (fields.DatetimeField, "datetime"),
    (fields.DateField, "date"),
    (fields.IntField, "integer"),
    (fields.DecimalField, "number"),
    (fields.FloatField, "number"),
    (fields.TextField, "text"),
    (fields.CharField, "string"),
)


def _to_int(value: Any, default: int) -> int:
    if isinstance(value, list):
        value = value[0] if value else None
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class ProxyQuery:
    """Queryset wrapper with mutable pagination bounds.

    The wrapped queryset is never paginated itself; ``build`` applies the
    current ``first_result`` and ``max_results`` on a copy.
    """

    def __init__(self, queryset: QuerySet) -> None:
        self.queryset = queryset
        self.first_result: int | None = None
        self.max_results: int | None = None

    def set_first_result(self, first_result: int | None) -> "ProxyQuery":
        self.first_result = first_result
        return self

    def set_max_results(self, max_results: int | None) -> "ProxyQuery":
        self.max_results = max_results
        return self

    def filter(self, *args: Any, **kwargs: Any) -> "ProxyQuery":
        self.queryset = self.queryset.filter(*args, **kwargs)
        return self

    def order_by(self, *orderings: str) -> "ProxyQuery":
        self.queryset = self.queryset.order_by(*orderings)
        return self

    def build(self) -> QuerySet:
        """Return the queryset with pagination bounds applied."""
        queryset = self.queryset
        if self.first_result is not None:
            queryset = queryset.offset(self.first_result)
        if self.max_results is not None:
            queryset = queryset.limit(self.max_results)
        return queryset

    async def execute(self) -> list[Model]:
        return await self.build()

    async def count(self) -> int:
        """Count matching rows ignoring pagination."""
        return await self.queryset.count()


class TortoiseDatagrid:
    """Filtered and paginated view over one model.

    Args:
        model: Administered model class.
        values: Filter and pager parameters taken from the request.
        per_page: Page size used when ``_per_page`` is absent.
    """

    FILTER_PREFIX = "filter_"

    def __init__(self, model: type[Model], values: Mapping[str, Any], per_page: int = 25) -> None:
        self.model = model
        self.values = dict(values)
        self.per_page = per_page
        self.query = ProxyQuery(model.all())
        self._built = False

    def build_pager(self) -> None:
        """Apply filters, ordering and the current page to the query once."""
        if self._built:
            return
        self._built = True
        fields_map = self.model._meta.fields_map

        for key, value in self.values.items():
            if not key.startswith(self.FILTER_PREFIX) or value in (None, "", []):
                continue
            name = key[len(self.FILTER_PREFIX):]
            if name not in fields_map:
                logger.debug("Ignoring unknown filter", extra={"filter": key})
                continue
            if isinstance(value, list):
                self.query.filter(**{f"{name}__in": value})
            else:
                self.query.filter(**{name: value})

        sort_by = self.values.get("_sort_by")
        if isinstance(sort_by, str) and sort_by in fields_map:
            order = str(self.values.get("_sort_order") or "ASC").upper()
            self.query.order_by(f"-{sort_by}" if order == "DESC" else sort_by)

        page = max(_to_int(self.values.get("_page"), 1), 1)
        per_page = max(_to_int(self.values.get("_per_page"), self.per_page), 1)
        self.query.set_first_result((page - 1) * per_page)
        self.query.set_max_results(per_page)

    def get_query(self) -> ProxyQuery:
        return self.query

    async def results(self) -> list[Model]:
        self.build_pager()
        return await self.query.execute()


class TortoiseModelManager:
    """Persistence collaborator backed by Tortoise ORM."""

    name = "tortoise"

    def get_pk_attr(self, model: type[Any]) -> str:
        """Return the primary-key attribute name for ``model``.

        Args:
            model: Model class to inspect.

        Returns:
            str: Primary-key field attribute, ``id`` without Tortoise metadata.
        """
        meta = getattr(model, "_meta", None)
        return getattr(meta, "pk_attr", "id") if meta else "id"

    async def find(self, model: type[Model], id: Any) -> Model | None:
        """Return the instance with primary key ``id`` or ``None``.

        This coroutine must be awaited.
        """
        if id in (None, ""):
            return None
        return await model.get_or_none(**{self.get_pk_attr(model): id})

    async def create(self, obj: Model) -> Model:
        await obj.save()
        return obj

    async def update(self, obj: Model) -> Model:
        await obj.save()
        return obj

    async def delete(self, obj: Model) -> None:
        await obj.delete()

    def get_model_instance(self, model: type[Model]) -> Model:
        return model()

    def get_normalized_identifier(self, obj: Any) -> str | None:
        if obj is None:
            return None
        value = getattr(obj, self.get_pk_attr(type(obj)), None)
        return None if value is None else str(value)

    def create_datagrid(
        self, model: type[Model], values: Mapping[str, Any], per_page: int = 25
    ) -> TortoiseDatagrid:
        return TortoiseDatagrid(model, values, per_page=per_page)

    def add_identifiers_to_query(
        self, model: type[Model], query: ProxyQuery, idx: Iterable[Any]
    ) -> None:
        """Narrow ``query`` to the primary keys listed in ``idx``."""
        query.filter(**{f"{self.get_pk_attr(model)}__in": list(idx)})

    async def batch_delete(self, model: type[Model], query: ProxyQuery) -> int:
        """Delete every row matched by ``query`` and return the row count.

        This coroutine must be awaited.
        """
        deleted = await query.build().delete()
        logger.info("Deleted %s %s row(s)", deleted, model.__name__)
        return deleted

    def get_new_field_description_instance(
        self, model: type[Model], name: str, options: Mapping[str, Any] | None = None
    ) -> FieldDescription:
        """Describe field ``name`` of ``model`` for the show view."""
        field = model._meta.fields_map.get(name.split(".", 1)[0])
        field_type = None
        if field is not None:
            for klass, type_name in FIELD_TYPES:
                if isinstance(field, klass):
                    field_type = type_name
                    break
        description = FieldDescription(name=name, type=field_type, options=dict(options or {}))
        if field is not None and field.description:
            description.options.setdefault("help", field.description)
        return description


__all__ = ["ProxyQuery", "TortoiseDatagrid", "TortoiseModelManager"]


# The End
