# -*- coding: utf-8 -*-
"""
dashboard

Controller handling global admin features that are not object related.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from ..conf import CrudAdminSettings, current_settings
from .layout import LayoutResolver
from .outcome import ActionOutcome, Render
from .pool import AdminPool
from .request import RequestContext


class CoreDispatcher:
    """Serve the dashboard listing every administrable model by group."""

    def __init__(self, pool: AdminPool, *, settings: CrudAdminSettings | None = None) -> None:
        self.pool = pool
        self._settings = settings
        self.layout = LayoutResolver(settings)

    @property
    def settings(self) -> CrudAdminSettings:
        return self._settings or current_settings()

    async def dashboard_action(self, request: RequestContext) -> ActionOutcome:
        """Display the dashboard with admins grouped by category."""

        return Render(
            self.settings.dashboard_template,
            {
                "groups": self.pool.get_dashboard_groups(),
                # honours the ajax override parameter as well as the transport header
                "base_template": self.layout.resolve(request),
            },
        )


__all__ = ["CoreDispatcher"]


# The End
