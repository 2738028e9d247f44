# -*- coding: utf-8 -*-
"""
dispatcher

Controller handling CRUD actions for a registered admin handle:

- list objects
- create a new object
- update an object
- show an object
- delete an object
- batch actions (batch delete is supported by default)

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, Mapping

from ..conf import CrudAdminSettings, current_settings
from .exceptions import ConfigurationError, InvalidRequest, NotFound, PermissionDenied
from .flash import FlashCategory, SessionFlashBag
from .interface import AdminHandlePool, FlashSink, Query
from .layout import LayoutResolver
from .outcome import ActionOutcome, Json, Redirect, Render
from .permissions import PermAction
from .request import RequestContext
from .scope import AdminScope

logger = logging.getLogger(__name__)

BatchHandler = Callable[[AdminScope, Query], Awaitable[ActionOutcome]]

_BATCH_MARKER = "_crudadmin_batch_action"


def batch_handler(name: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Declare the decorated dispatcher method as handler of batch action ``name``."""

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        setattr(func, _BATCH_MARKER, name)
        return func

    return decorator


class CrudDispatcher:
    """Map inbound requests onto admin handle operations."""

    def __init__(
        self,
        pool: AdminHandlePool,
        *,
        settings: CrudAdminSettings | None = None,
        flash_factory: Callable[[RequestContext], FlashSink] | None = None,
        batch_handlers: Mapping[str, BatchHandler] | None = None,
    ) -> None:
        self.pool = pool
        self._settings = settings
        self.layout = LayoutResolver(settings)
        self._flash_factory = flash_factory
        self._batch_handlers: Dict[str, BatchHandler] = {
            name: getattr(self, attr) for name, attr in self._declared_batch_handlers().items()
        }
        for name, handler in (batch_handlers or {}).items():
            self.register_batch_handler(name, handler)

    @property
    def settings(self) -> CrudAdminSettings:
        return self._settings or current_settings()

    # ==== Contextualization ====
    def configure(self, request: RequestContext) -> AdminScope:
        """Contextualize the admin handle depending on the current request."""

        settings = self.settings
        admin_code = request.get(settings.admin_code_param)
        if not admin_code:
            message = (
                f"There is no `{settings.admin_code_param}` defined for the controller "
                f"`{type(self).__name__}` and the current route "
                f"`{request.get(settings.route_param)}`"
            )
            logger.error(message)
            raise ConfigurationError(message)

        admin = self.pool.get_admin_by_code(admin_code)
        if admin is None:
            message = (
                f'Unable to find the admin class "{admin_code}" related to the current '
                f'controller "{type(self).__name__}"'
            )
            logger.error(message)
            raise ConfigurationError(message)

        root = admin
        current_child = False
        if admin.is_child():
            current_child = True
            while root.is_child():
                parent = root.get_parent()
                if parent is None:
                    raise ConfigurationError(f"Child admin `{admin_code}` has no parent")
                root = parent

        return AdminScope(admin=admin, root=root, request=request, current_child=current_child)

    # ==== Actions ====
    async def list_action(self, request: RequestContext) -> ActionOutcome:
        """Display a list of objects with filters and pagination."""

        scope = self.configure(request)
        admin = scope.admin
        self.check_access(scope, PermAction.LIST)

        return Render(
            admin.get_list_template(),
            {
                "action": "list",
                "admin": admin,
                "base_template": self.get_base_template(request),
            },
        )

    async def show_action(self, request: RequestContext, id: Any = None) -> ActionOutcome:
        """Display one object.

        The identifier is always read from the request through the admin's
        identifier parameter; ``id`` is accepted for route compatibility only.
        """

        scope = self.configure(request)
        admin = scope.admin
        self.check_access(scope, PermAction.SHOW)

        obj = await self.find_object(scope)
        scope.set_subject(obj)

        return Render(
            admin.get_show_template(),
            {
                "action": "show",
                "object": obj,
                "elements": admin.get_show(),
                "admin": admin,
                "base_template": self.get_base_template(request),
            },
        )

    async def create_action(self, request: RequestContext) -> ActionOutcome:
        """Display the creation form and create the object when submitted."""

        scope = self.configure(request)
        admin = scope.admin
        self.check_access(scope, PermAction.CREATE)

        obj = admin.get_new_instance()
        return await self.process_form(
            scope,
            obj,
            action="create",
            persist=admin.create,
            success_key="flash_create_success",
            error_key="flash_create_error",
        )

    async def edit_action(self, request: RequestContext, id: Any = None) -> ActionOutcome:
        """Display the edition form and update the object when submitted."""

        scope = self.configure(request)
        admin = scope.admin
        self.check_access(scope, PermAction.EDIT)

        obj = await self.find_object(scope)
        return await self.process_form(
            scope,
            obj,
            action="edit",
            persist=admin.update,
            success_key="flash_edit_success",
            error_key="flash_edit_error",
        )

    async def delete_action(self, request: RequestContext, id: Any = None) -> ActionOutcome:
        """Delete an object; there is no confirmation step."""

        scope = self.configure(request)
        admin = scope.admin
        self.check_access(scope, PermAction.DELETE)

        obj = await self.find_object(scope)
        await admin.delete(obj)
        logger.info(
            "Deleted object %s through admin %s",
            admin.get_normalized_identifier(obj),
            admin.code,
        )
        self.add_flash(request, FlashCategory.SUCCESS, "flash_delete_success")
        return Redirect(admin.generate_url("list"))

    async def batch_action(self, request: RequestContext) -> ActionOutcome:
        """Run the selected batch action over the selected objects."""

        scope = self.configure(request)
        admin = scope.admin
        submit_method = self.settings.submit_method
        if request.method != submit_method:
            raise InvalidRequest(f"invalid request type, {submit_method} expected")

        action = request.get("action")
        idx = request.get_list("idx")
        all_elements = request.get_bool("all_elements")

        if not idx and not all_elements:
            self.add_flash(request, FlashCategory.NOTICE, "flash_batch_empty")
            return Redirect(admin.generate_url("list", admin.get_filter_parameters(request)))

        if not isinstance(action, str) or action not in admin.get_batch_actions():
            message = f"The `{action}` batch action is not defined"
            logger.error(message)
            raise ConfigurationError(message)

        handler = self.get_batch_handler(action)

        datagrid = admin.get_datagrid(request)
        datagrid.build_pager()
        query = datagrid.get_query()
        query.set_first_result(None)
        query.set_max_results(None)

        if idx:
            admin.get_model_manager().add_identifiers_to_query(admin.get_class(), query, idx)

        logger.debug(
            "Running batch action %s on admin %s",
            action,
            admin.code,
            extra={"ids": idx, "all_elements": all_elements},
        )
        return await handler(scope, query)

    @batch_handler("delete")
    async def batch_action_delete(self, scope: AdminScope, query: Query) -> ActionOutcome:
        """Execute a batch delete."""

        admin = scope.admin
        self.check_access(scope, PermAction.DELETE)

        deleted = await admin.get_model_manager().batch_delete(admin.get_class(), query)
        logger.info("Batch deleted %s object(s) through admin %s", deleted, admin.code)
        self.add_flash(scope.request, FlashCategory.SUCCESS, "flash_batch_delete_success")
        return Redirect(admin.generate_url("list", admin.get_filter_parameters(scope.request)))

    # ==== Batch handler registry ====
    @classmethod
    def _declared_batch_handlers(cls) -> Dict[str, str]:
        """Return ``{action name: attribute name}`` for decorated methods."""

        declared: Dict[str, str] = {}
        for klass in reversed(cls.__mro__):
            for attr, value in vars(klass).items():
                name = getattr(value, _BATCH_MARKER, None)
                if name:
                    declared[name] = attr
        return declared

    def register_batch_handler(self, name: str, handler: BatchHandler) -> None:
        """Register ``handler`` for batch action ``name`` on this dispatcher."""
        if not callable(handler):
            raise ConfigurationError(f"Batch handler for `{name}` is not callable")
        self._batch_handlers[name] = handler

    def get_batch_handler(self, name: str) -> BatchHandler:
        """Return the handler registered for ``name``."""
        handler = self._batch_handlers.get(name)
        if handler is None:
            message = (
                f"A batch handler must be registered on `{type(self).__name__}` "
                f'to execute batch action "{name}"'
            )
            logger.error(message)
            raise ConfigurationError(message)
        return handler

    def get_batch_handler_names(self) -> list[str]:
        return sorted(self._batch_handlers)

    # ==== Helpers ====
    def check_access(self, scope: AdminScope, permission: PermAction) -> None:
        """Raise ``PermissionDenied`` unless the admin grants ``permission``."""

        if not scope.admin.is_granted(permission.value):
            logger.debug(
                "Permission denied",
                extra={"admin_code": scope.admin.code, "action": permission.value},
            )
            raise PermissionDenied(f"Access denied: {permission.value} on {scope.admin.code}")

    async def find_object(self, scope: AdminScope) -> Any:
        """Load the object addressed by the request or raise ``NotFound``."""

        admin = scope.admin
        object_id = scope.request.get(admin.get_id_parameter())
        obj = None
        if object_id not in (None, ""):
            obj = await admin.get_object(object_id)
        if obj is None:
            logger.debug(
                "Object lookup failed",
                extra={"admin_code": admin.code, "object_id": object_id},
            )
            raise NotFound(
                f'Unable to find the object "{admin.get_class().__name__}" '
                f'with primary key "{object_id}"'
            )
        return obj

    async def process_form(
        self,
        scope: AdminScope,
        obj: Any,
        *,
        action: str,
        persist: Callable[[Any], Awaitable[Any]],
        success_key: str,
        error_key: str,
    ) -> ActionOutcome:
        """Run the shared create/edit form lifecycle for ``obj``."""

        admin = scope.admin
        request = scope.request
        scope.set_subject(obj)
        form = admin.get_form()
        form.set_data(obj)

        if request.method == self.settings.submit_method:
            form.bind(request)

            if form.is_valid():
                await persist(obj)
                object_id = admin.get_normalized_identifier(obj)
                logger.info("%s object %s through admin %s", action, object_id, admin.code)
                self.add_flash(request, FlashCategory.SUCCESS, success_key)

                if self.is_xml_http_request(request):
                    return self.render_json(request, {"result": "ok", "objectId": object_id})

                return self.redirect_to(scope, obj)

            self.add_flash(request, FlashCategory.ERROR, error_key)

        return Render(
            admin.get_edit_template(),
            {
                "action": action,
                "form": form.create_view(),
                "object": obj,
                "admin": admin,
                "base_template": self.get_base_template(request),
            },
        )

    def redirect_to(self, scope: AdminScope, obj: Any) -> Redirect:
        """Redirect depending on the button pressed after a create or update."""

        admin = scope.admin
        request = scope.request
        if request.get_bool("btn_update_and_list"):
            url = admin.generate_url("list")
        elif request.get_bool("btn_create_and_create"):
            url = admin.generate_url("create")
        else:
            url = admin.generate_url("edit", {"id": admin.get_normalized_identifier(obj)})
        return Redirect(url)

    def render_json(
        self,
        request: RequestContext,
        data: Any,
        status: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> Json:
        """Return ``data`` as a JSON outcome.

        Iframe based uploads (multipart with the override flag) get a
        ``text/plain`` content type so browsers do not offer a download.
        """

        content_type = "application/json"
        if request.get_bool(self.settings.xml_http_request_param) and request.content_type.startswith(
            "multipart/form-data"
        ):
            content_type = "text/plain"
        return Json(payload=data, status=status, content_type=content_type, headers=dict(headers or {}))

    def is_xml_http_request(self, request: RequestContext) -> bool:
        return self.layout.is_asynchronous(request)

    def get_base_template(self, request: RequestContext) -> str:
        return self.layout.resolve(request)

    def get_flash_bag(self, request: RequestContext) -> FlashSink:
        if self._flash_factory is not None:
            return self._flash_factory(request)
        return SessionFlashBag(request.session, self.settings.flash_session_key)

    def add_flash(self, request: RequestContext, category: str, message_key: str) -> None:
        self.get_flash_bag(request).set_flash(category, message_key)


__all__ = ["BatchHandler", "CrudDispatcher", "batch_handler"]


# The End
