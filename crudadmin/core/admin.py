# -*- coding: utf-8 -*-
"""
admin

Base class for admin handles.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Sequence
from urllib.parse import urlencode

from pydantic import BaseModel

from ..conf import CrudAdminSettings, current_settings
from .exceptions import ConfigurationError
from .forms import SchemaForm
from .permissions import PermAction
from .request import RequestContext
from .show import (
    FieldDescription,
    FieldDescriptionCollection,
    ShowBuilder,
    ShowMapper,
    SimpleShowBuilder,
)


class BaseAdminHandle:
    """Admin handle for one model class.

    Responsibility lines
    --------------------
    * Persistence goes through ``model_manager``; the handle itself keeps no
      per-request state.
    * ``is_granted`` is the only authorization hook used by the dispatcher.
    * URLs follow ``{base_url}/list``, ``{base_url}/{id}/edit`` and so on.
    """

    model: type[Any] | None = None
    form_schema: type[BaseModel] | None = None
    form_fields: Sequence[str] | None = None
    show_fields: Sequence[str] = ()

    code: str = ""
    label: str | None = None
    group: str | None = None
    base_url: str = ""
    id_parameter: str = "id"

    templates: Mapping[str, str] = {}
    batch_actions: Mapping[str, Mapping[str, Any]] = {
        "delete": {"label": "Delete", "ask_confirmation": True},
    }

    FILTER_PREFIX: str = "filter_"
    PAGER_PARAMETERS: tuple[str, ...] = ("_page", "_per_page", "_sort_by", "_sort_order")

    URL_PATTERNS: Mapping[str, str] = {
        "list": "{base}/list",
        "create": "{base}/create",
        "batch": "{base}/batch",
        "edit": "{base}/{id}/edit",
        "show": "{base}/{id}/show",
        "delete": "{base}/{id}/delete",
    }

    def __init__(
        self,
        model_manager: Any,
        *,
        model: type[Any] | None = None,
        code: str | None = None,
        base_url: str | None = None,
        label: str | None = None,
        group: str | None = None,
        settings: CrudAdminSettings | None = None,
        permission_checker: Callable[["BaseAdminHandle", str], bool] | None = None,
        show_builder: ShowBuilder | None = None,
    ) -> None:
        self.model_manager = model_manager
        if model is not None:
            self.model = model
        if self.model is None:
            raise ConfigurationError(f"{type(self).__name__} does not define a model")
        self.code = code or self.code or self.model.__name__.lower()
        self.base_url = (base_url if base_url is not None else self.base_url or f"/{self.code}").rstrip("/")
        if label is not None:
            self.label = label
        if group is not None:
            self.group = group
        self._settings = settings
        self._permission_checker = permission_checker
        self.show_builder = show_builder or SimpleShowBuilder()
        self._parent: BaseAdminHandle | None = None
        self._children: Dict[str, BaseAdminHandle] = {}
        self._show: FieldDescriptionCollection | None = None
        self._show_groups: Dict[str, Dict[str, Any]] = {}
        self._show_field_descriptions: Dict[str, FieldDescription] = {}

    @property
    def settings(self) -> CrudAdminSettings:
        return self._settings or current_settings()

    # --- identity -----------------------------------------------------------

    def get_class(self) -> type[Any]:
        return self.model  # type: ignore[return-value]

    def get_label(self) -> str:
        return self.label or self.get_class().__name__

    def get_id_parameter(self) -> str:
        return self.id_parameter

    def get_model_manager(self) -> Any:
        return self.model_manager

    # --- authorization ------------------------------------------------------

    def is_granted(self, permission: str) -> bool:
        """Return ``True`` when ``permission`` is allowed on this admin."""
        if self._permission_checker is not None:
            return bool(self._permission_checker(self, permission))
        return permission in {action.value for action in PermAction}

    # --- objects ------------------------------------------------------------

    async def get_object(self, id: Any) -> Any | None:
        return await self.model_manager.find(self.get_class(), id)

    def get_new_instance(self) -> Any:
        return self.model_manager.get_model_instance(self.get_class())

    async def create(self, obj: Any) -> Any:
        await self.model_manager.create(obj)
        return obj

    async def update(self, obj: Any) -> Any:
        await self.model_manager.update(obj)
        return obj

    async def delete(self, obj: Any) -> Any:
        await self.model_manager.delete(obj)
        return obj

    def get_normalized_identifier(self, obj: Any) -> str | None:
        return self.model_manager.get_normalized_identifier(obj)

    # --- forms and views ----------------------------------------------------

    def get_form(self) -> SchemaForm:
        if self.form_schema is None:
            raise ConfigurationError(f"Admin `{self.code}` does not define a form schema")
        return SchemaForm(self.form_schema, fields=self.form_fields)

    def get_list_template(self) -> str:
        return self.templates.get("list") or self.settings.list_template

    def get_edit_template(self) -> str:
        return self.templates.get("edit") or self.settings.edit_template

    def get_show_template(self) -> str:
        return self.templates.get("show") or self.settings.show_template

    def configure_show_fields(self, mapper: ShowMapper) -> None:
        """Declare the show view; defaults to ``show_fields`` or the form fields."""
        names = list(self.show_fields)
        if not names and self.form_schema is not None:
            names = list(self.form_fields or self.form_schema.model_fields)
        for name in names:
            mapper.add(name)

    def get_show(self) -> FieldDescriptionCollection:
        if self._show is None:
            collection = FieldDescriptionCollection()
            self.configure_show_fields(ShowMapper(self.show_builder, collection, self))
            self._show = collection
        return self._show

    def get_show_groups(self) -> Dict[str, Dict[str, Any]]:
        return self._show_groups

    def set_show_groups(self, groups: Dict[str, Dict[str, Any]]) -> None:
        self._show_groups = groups

    def has_show_field_description(self, name: str) -> bool:
        return name in self._show_field_descriptions

    def add_show_field_description(self, name: str, description: FieldDescription) -> None:
        self._show_field_descriptions[name] = description

    def remove_show_field_description(self, name: str) -> None:
        self._show_field_descriptions.pop(name, None)
        for group in self._show_groups.values():
            group.get("fields", {}).pop(name, None)

    # --- list, filters and batch actions ------------------------------------

    def get_batch_actions(self) -> Mapping[str, Mapping[str, Any]]:
        """Return every declared batch action; permissions are checked by the handlers."""
        return dict(self.batch_actions)

    def get_visible_batch_actions(self) -> Mapping[str, Mapping[str, Any]]:
        """Return the batch actions offered in the list view."""
        actions = dict(self.batch_actions)
        if "delete" in actions and not self.is_granted(PermAction.DELETE.value):
            actions.pop("delete")
        return actions

    def get_filter_parameters(self, request: RequestContext) -> Dict[str, Any]:
        """Return the filter and pager parameters present on ``request``."""
        return {
            name: value
            for name, value in request.params.items()
            if name.startswith(self.FILTER_PREFIX) or name in self.PAGER_PARAMETERS
        }

    def get_datagrid(self, request: RequestContext) -> Any:
        return self.model_manager.create_datagrid(
            self.get_class(),
            self.get_filter_parameters(request),
            per_page=self.settings.per_page,
        )

    # --- routing ------------------------------------------------------------

    def generate_url(self, name: str, params: Mapping[str, Any] | None = None) -> str:
        pattern = self.URL_PATTERNS.get(name)
        if pattern is None:
            raise ConfigurationError(f"Admin `{self.code}` has no route named `{name}`")
        query = dict(params or {})
        path_values: Dict[str, Any] = {"base": self.base_url}
        if "{id}" in pattern:
            if query.get("id") in (None, ""):
                raise ConfigurationError(f"Route `{name}` of admin `{self.code}` requires an id")
            path_values["id"] = query.pop("id")
        url = pattern.format(**path_values)
        if query:
            url = f"{url}?{urlencode(query, doseq=True)}"
        return url

    # --- hierarchy ----------------------------------------------------------

    def add_child(self, child: "BaseAdminHandle") -> "BaseAdminHandle":
        child._parent = self
        self._children[child.code] = child
        return child

    def get_children(self) -> Dict[str, "BaseAdminHandle"]:
        return dict(self._children)

    def is_child(self) -> bool:
        return self._parent is not None

    def get_parent(self) -> "BaseAdminHandle | None":
        return self._parent

    def __repr__(self) -> str:
        return f"<{type(self).__name__} code={self.code!r}>"


__all__ = ["BaseAdminHandle"]


# The End
