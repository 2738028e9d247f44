# -*- coding: utf-8 -*-
"""
layout

Base layout selection for rendered admin pages.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from ..conf import CrudAdminSettings, current_settings
from .request import RequestContext


class LayoutResolver:
    """Choose the ajax or full layout for a request."""

    def __init__(self, settings: CrudAdminSettings | None = None) -> None:
        self._settings = settings

    @property
    def settings(self) -> CrudAdminSettings:
        return self._settings or current_settings()

    def is_asynchronous(self, request: RequestContext) -> bool:
        """Return ``True`` if the request is done by an ajax like query."""
        return request.is_asynchronous(self.settings.xml_http_request_param)

    def resolve(self, request: RequestContext) -> str:
        """Return the base template id; evaluated on every call."""
        settings = self.settings
        if self.is_asynchronous(request):
            return settings.ajax_layout_template
        return settings.layout_template


__all__ = ["LayoutResolver"]


# The End
