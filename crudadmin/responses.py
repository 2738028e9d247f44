# -*- coding: utf-8 -*-
"""
responses

Turn action outcomes into Starlette responses.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from .conf import CrudAdminSettings, current_settings
from .core.exceptions import HTTPError
from .core.flash import SessionFlashBag
from .core.outcome import ActionOutcome, Json, Redirect, Render

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def default_templates() -> Jinja2Templates:
    """Return a template loader for the bundled templates."""
    return Jinja2Templates(directory=str(TEMPLATES_DIR))


class OutcomeResponder:
    """Render ``Render``, ``Redirect`` and ``Json`` outcomes over HTTP."""

    def __init__(
        self,
        templates: Jinja2Templates | None = None,
        *,
        settings: CrudAdminSettings | None = None,
    ) -> None:
        self.templates = templates or default_templates()
        self._settings = settings

    @property
    def settings(self) -> CrudAdminSettings:
        return self._settings or current_settings()

    def to_response(self, outcome: ActionOutcome, request: Request) -> Response:
        if isinstance(outcome, Redirect):
            return RedirectResponse(outcome.url, status_code=outcome.status)
        if isinstance(outcome, Json):
            return JSONResponse(
                outcome.payload,
                status_code=outcome.status,
                headers=dict(outcome.headers),
                media_type=outcome.content_type,
            )
        if isinstance(outcome, Render):
            return self.templates.TemplateResponse(
                request=request,
                name=outcome.template,
                context=self.build_context(outcome, request),
            )
        raise TypeError(f"Unsupported outcome {outcome!r}")

    def build_context(self, outcome: Render, request: Request) -> dict[str, Any]:
        """Return the template context with request and pending flashes."""

        context = dict(outcome.context)
        context["request"] = request
        if "session" in request.scope:
            bag = SessionFlashBag(request.session, self.settings.flash_session_key)
            context.setdefault("flashes", bag.pop_all())
        else:
            context.setdefault("flashes", {})
        return context

    @staticmethod
    def http_exception(exc: HTTPError) -> HTTPException:
        """Translate an admin error into ``HTTPException`` with the same status."""
        return HTTPException(status_code=exc.status_code, detail=str(exc))


__all__ = ["OutcomeResponder", "TEMPLATES_DIR", "default_templates"]


# The End
