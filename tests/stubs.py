# -*- coding: utf-8 -*-
"""
stubs

Recording collaborators used to exercise the dispatcher in isolation.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Any, Dict, List
from urllib.parse import urlencode

from crudadmin.core.permissions import PermAction
from crudadmin.core.request import RequestContext
from crudadmin.core.show import FieldDescription


class Article:
    """Plain object administered by ``StubAdmin``."""

    def __init__(self, id: int | None = None, title: str = "") -> None:
        self.id = id
        self.title = title


class RecordingQuery:
    """Query remembering pagination bounds and identifier filters."""

    def __init__(self) -> None:
        self.first_result: int | None = 0
        self.max_results: int | None = 25
        self.identifiers: List[Any] | None = None

    def set_first_result(self, first_result: int | None) -> None:
        self.first_result = first_result

    def set_max_results(self, max_results: int | None) -> None:
        self.max_results = max_results


class StubDatagrid:
    """Datagrid returning a single recording query."""

    def __init__(self) -> None:
        self.query = RecordingQuery()
        self.pager_built = False

    def build_pager(self) -> None:
        self.pager_built = True

    def get_query(self) -> RecordingQuery:
        return self.query


class StubModelManager:
    """Model manager recording identifier filters and batch deletes."""

    def __init__(self) -> None:
        self.calls: List[tuple[str, Any]] = []

    def add_identifiers_to_query(self, model: type[Any], query: RecordingQuery, idx: List[Any]) -> None:
        query.identifiers = list(idx)
        self.calls.append(("add_identifiers_to_query", list(idx)))

    async def batch_delete(self, model: type[Any], query: RecordingQuery) -> int:
        self.calls.append(("batch_delete", query))
        return len(query.identifiers or [])


class StubForm:
    """Form whose validity is fixed up front."""

    def __init__(self, valid: bool = True) -> None:
        self.valid = valid
        self.data: Any = None
        self.bound: RequestContext | None = None

    def set_data(self, obj: Any) -> None:
        self.data = obj

    def bind(self, request: RequestContext) -> None:
        self.bound = request

    def is_valid(self) -> bool:
        return self.bound is not None and self.valid

    def create_view(self) -> Dict[str, Any]:
        return {"submitted": self.bound is not None, "valid": self.is_valid()}


class StubAdmin:
    """Admin handle recording every mutating call."""

    def __init__(
        self,
        code: str = "article",
        *,
        granted: set[str] | None = None,
        objects: Dict[str, Article] | None = None,
        form_valid: bool = True,
        batch_actions: Dict[str, Dict[str, Any]] | None = None,
    ) -> None:
        self.code = code
        self.granted = {action.value for action in PermAction} if granted is None else granted
        self.objects = objects if objects is not None else {"1": Article(1, "First")}
        self.form = StubForm(valid=form_valid)
        self.batch_actions = {"delete": {"label": "Delete"}} if batch_actions is None else batch_actions
        self.model_manager = StubModelManager()
        self.datagrid = StubDatagrid()
        self.parent: StubAdmin | None = None
        self.calls: List[tuple[str, Any]] = []
        self.next_id = 42

    def is_granted(self, permission: str) -> bool:
        return permission in self.granted

    def get_class(self) -> type[Any]:
        return Article

    def get_label(self) -> str:
        return self.code.capitalize()

    def get_id_parameter(self) -> str:
        return "id"

    async def get_object(self, id: Any) -> Article | None:
        self.calls.append(("get_object", id))
        return self.objects.get(str(id))

    def get_new_instance(self) -> Article:
        return Article()

    def get_form(self) -> StubForm:
        return self.form

    async def create(self, obj: Article) -> Article:
        obj.id = self.next_id
        self.calls.append(("create", obj))
        return obj

    async def update(self, obj: Article) -> Article:
        self.calls.append(("update", obj))
        return obj

    async def delete(self, obj: Article) -> Article:
        self.calls.append(("delete", obj))
        return obj

    def get_normalized_identifier(self, obj: Article) -> str | None:
        return None if obj.id is None else str(obj.id)

    def generate_url(self, name: str, params: Dict[str, Any] | None = None) -> str:
        url = f"/{self.code}/{name}"
        if params:
            url = f"{url}?{urlencode(params, doseq=True)}"
        return url

    def get_list_template(self) -> str:
        return "list.html"

    def get_edit_template(self) -> str:
        return "edit.html"

    def get_show_template(self) -> str:
        return "show.html"

    def get_show(self) -> List[str]:
        return ["title"]

    def get_batch_actions(self) -> Dict[str, Dict[str, Any]]:
        return self.batch_actions

    def get_datagrid(self, request: RequestContext) -> StubDatagrid:
        return self.datagrid

    def get_filter_parameters(self, request: RequestContext) -> Dict[str, Any]:
        return {key: value for key, value in request.params.items() if key.startswith("filter_")}

    def get_model_manager(self) -> StubModelManager:
        return self.model_manager

    def is_child(self) -> bool:
        return self.parent is not None

    def get_parent(self) -> "StubAdmin | None":
        return self.parent


class MemoryManager:
    """Model manager keeping objects in a dictionary."""

    def __init__(self) -> None:
        self.store: Dict[str, Any] = {}
        self.datagrids: List[tuple] = []
        self.next_id = 1

    async def find(self, model: type[Any], id: Any) -> Any:
        return self.store.get(str(id))

    async def create(self, obj: Any) -> None:
        obj.id = self.next_id
        self.next_id += 1
        self.store[str(obj.id)] = obj

    async def update(self, obj: Any) -> None:
        self.store[str(obj.id)] = obj

    async def delete(self, obj: Any) -> None:
        self.store.pop(str(obj.id), None)

    def get_model_instance(self, model: type[Any]) -> Any:
        return model()

    def get_normalized_identifier(self, obj: Any) -> str | None:
        return None if obj.id is None else str(obj.id)

    def create_datagrid(self, model: type[Any], values: Dict[str, Any], per_page: int = 25) -> str:
        self.datagrids.append((model, values, per_page))
        return "datagrid"

    def get_new_field_description_instance(
        self, model: type[Any], name: str, options: Dict[str, Any] | None = None
    ) -> FieldDescription:
        return FieldDescription(name=name, options=dict(options or {}))


class StubPool:
    """Pool backed by a plain dictionary."""

    def __init__(self, *admins: StubAdmin) -> None:
        self.admins = {admin.code: admin for admin in admins}

    def get_admin_by_code(self, code: str) -> StubAdmin | None:
        return self.admins.get(code)


class RecordingFlash:
    """Flash sink keeping messages in call order."""

    def __init__(self) -> None:
        self.messages: List[tuple[str, str]] = []

    def set_flash(self, category: str, message_key: str) -> None:
        self.messages.append((category, message_key))


def make_request(method: str = "GET", admin_code: str | None = "article", **params: Any) -> RequestContext:
    """Return a request context addressed to ``admin_code``."""

    headers = params.pop("headers", {})
    if admin_code is not None:
        params.setdefault("_sonata_admin", admin_code)
    return RequestContext(method=method, params=params, headers=headers)


# The End
