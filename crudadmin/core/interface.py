# -*- coding: utf-8 -*-
"""
interface

Structural contracts for the collaborators consumed by the CRUD dispatcher.

The dispatcher never imports a concrete ORM, form library or template engine.
It talks to the objects described here; ``crudadmin.core.admin`` and
``crudadmin.adapters`` provide implementations built on Tortoise ORM and
pydantic.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:  # pragma: no cover
    from .request import RequestContext


@runtime_checkable
class Query(Protocol):
    """Query produced by a datagrid; pagination bounds are mutable."""

    def set_first_result(self, value: int | None) -> None:  # pragma: no cover - structural
        """Set the offset, ``None`` removes it."""

    def set_max_results(self, value: int | None) -> None:  # pragma: no cover - structural
        """Set the limit, ``None`` removes it."""


@runtime_checkable
class Datagrid(Protocol):
    """Filtered, paginated view over a model collection."""

    def build_pager(self) -> None:  # pragma: no cover - structural
        """Apply filters and pagination to the underlying query."""

    def get_query(self) -> Query:  # pragma: no cover - structural
        """Return the query backing the pager."""


@runtime_checkable
class ModelManager(Protocol):
    """Persistence operations that act on whole queries."""

    def add_identifiers_to_query(
        self, model: type, query: Query, ids: Sequence[Any]
    ) -> None:  # pragma: no cover - structural
        """Narrow ``query`` to the given identifiers."""

    async def batch_delete(self, model: type, query: Query) -> Any:  # pragma: no cover - structural
        """Delete every object matched by ``query``."""


@runtime_checkable
class Form(Protocol):
    """Form lifecycle used by the create and edit actions."""

    def set_data(self, obj: Any) -> None:  # pragma: no cover - structural
        """Populate the form from ``obj``."""

    def bind(self, request: "RequestContext") -> None:  # pragma: no cover - structural
        """Bind submitted request data into the form."""

    def is_valid(self) -> bool:  # pragma: no cover - structural
        """Return ``True`` when bound data passed validation."""

    def create_view(self) -> Any:  # pragma: no cover - structural
        """Return a template-friendly representation of the form."""


@runtime_checkable
class FlashSink(Protocol):
    """One-shot notification storage."""

    def set_flash(self, category: str, message_key: str) -> None:  # pragma: no cover - structural
        """Queue ``message_key`` under ``category``."""


@runtime_checkable
class AdminHandle(Protocol):
    """Per-model collaborator providing metadata, forms and persistence."""

    code: str

    def is_granted(self, permission: str) -> bool: ...  # pragma: no cover
    def get_class(self) -> type: ...  # pragma: no cover
    def get_label(self) -> str: ...  # pragma: no cover
    def get_id_parameter(self) -> str: ...  # pragma: no cover
    async def get_object(self, id: Any) -> Any | None: ...  # pragma: no cover
    def get_new_instance(self) -> Any: ...  # pragma: no cover
    def get_form(self) -> Form: ...  # pragma: no cover
    async def create(self, obj: Any) -> Any: ...  # pragma: no cover
    async def update(self, obj: Any) -> Any: ...  # pragma: no cover
    async def delete(self, obj: Any) -> Any: ...  # pragma: no cover
    def get_normalized_identifier(self, obj: Any) -> str | None: ...  # pragma: no cover
    def generate_url(self, name: str, params: Mapping[str, Any] | None = None) -> str: ...  # pragma: no cover
    def get_list_template(self) -> str: ...  # pragma: no cover
    def get_edit_template(self) -> str: ...  # pragma: no cover
    def get_show_template(self) -> str: ...  # pragma: no cover
    def get_show(self) -> Any: ...  # pragma: no cover
    def get_batch_actions(self) -> Mapping[str, Any]: ...  # pragma: no cover
    def get_datagrid(self, request: "RequestContext") -> Datagrid: ...  # pragma: no cover
    def get_filter_parameters(self, request: "RequestContext") -> dict[str, Any]: ...  # pragma: no cover
    def get_model_manager(self) -> ModelManager: ...  # pragma: no cover
    def is_child(self) -> bool: ...  # pragma: no cover
    def get_parent(self) -> "AdminHandle | None": ...  # pragma: no cover


@runtime_checkable
class AdminHandlePool(Protocol):
    """Lookup of admin handles by their code."""

    def get_admin_by_code(self, code: str) -> AdminHandle | None:  # pragma: no cover - structural
        """Return the handle registered under ``code`` or ``None``."""


__all__ = [
    "Query",
    "Datagrid",
    "ModelManager",
    "Form",
    "FlashSink",
    "AdminHandle",
    "AdminHandlePool",
]


# The End
