# -*- coding: utf-8 -*-
"""
router

Attach named admin routes to a FastAPI router.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from fastapi import APIRouter, Request
from fastapi.responses import Response

from .core.dashboard import CoreDispatcher
from .core.dispatcher import CrudDispatcher
from .core.exceptions import ConfigurationError, HTTPError
from .core.outcome import ActionOutcome
from .core.request import RequestContext
from .responses import OutcomeResponder

logger = logging.getLogger(__name__)

Action = Callable[[RequestContext], Awaitable[ActionOutcome]]


class CrudRouterBuilder:
    """Helper to attach the CRUD routes of one admin handle."""

    ROUTES: tuple[tuple[str, str, tuple[str, ...], str], ...] = (
        ("list", "/list", ("GET",), "list_action"),
        ("create", "/create", ("GET", "POST"), "create_action"),
        ("batch", "/batch", ("GET", "POST"), "batch_action"),
        ("edit", "/{id}/edit", ("GET", "POST"), "edit_action"),
        ("show", "/{id}/show", ("GET",), "show_action"),
        ("delete", "/{id}/delete", ("GET", "POST"), "delete_action"),
    )

    @staticmethod
    def endpoint(
        action: Action,
        responder: OutcomeResponder,
        extra: dict[str, Any],
    ) -> Callable[[Request], Awaitable[Response]]:
        """Wrap ``action`` into a FastAPI endpoint."""

        async def view(request: Request) -> Response:
            context = await RequestContext.from_request(request, extra=extra)
            try:
                outcome = await action(context)
            except HTTPError as exc:
                raise responder.http_exception(exc) from exc
            return responder.to_response(outcome, request)

        return view

    @classmethod
    def mount(
        cls,
        router: APIRouter,
        *,
        dispatcher: CrudDispatcher,
        admin_code: str,
        prefix: str | None = None,
        responder: OutcomeResponder | None = None,
    ) -> APIRouter:
        """Mount the routes of admin ``admin_code`` on ``router``.

        ``prefix`` defaults to the admin's ``base_url`` so that URLs generated
        by the handle point back at these routes. Route names are
        ``<code>_list``, ``<code>_create`` and so on.
        """

        admin = dispatcher.pool.get_admin_by_code(admin_code)
        if admin is None:
            raise ConfigurationError(f"No admin registered under `{admin_code}`")
        base = (prefix if prefix is not None else getattr(admin, "base_url", f"/{admin_code}")).rstrip("/")
        responder = responder or OutcomeResponder(settings=dispatcher._settings)
        settings = dispatcher.settings

        for suffix, path, methods, attr in cls.ROUTES:
            name = f"{admin_code}_{suffix}"
            extra = {settings.admin_code_param: admin_code, settings.route_param: name}
            router.add_api_route(
                base + path,
                cls.endpoint(getattr(dispatcher, attr), responder, extra),
                methods=list(methods),
                name=name,
                include_in_schema=False,
            )
            logger.debug("Mounted route %s at %s", name, base + path)
        return router

    @classmethod
    def mount_dashboard(
        cls,
        router: APIRouter,
        *,
        dispatcher: CoreDispatcher,
        path: str = "/",
        responder: OutcomeResponder | None = None,
    ) -> APIRouter:
        """Mount the dashboard as route ``admin_dashboard``."""

        responder = responder or OutcomeResponder(settings=dispatcher._settings)
        extra = {dispatcher.settings.route_param: "admin_dashboard"}
        router.add_api_route(
            path,
            cls.endpoint(dispatcher.dashboard_action, responder, extra),
            methods=["GET"],
            name="admin_dashboard",
            include_in_schema=False,
        )
        return router


__all__ = ["CrudRouterBuilder"]


# The End
