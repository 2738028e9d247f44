# -*- coding: utf-8 -*-
"""
conf

Runtime configuration utilities for the crudadmin package.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from threading import RLock
from typing import Callable, Mapping


@dataclass
class CrudAdminSettings:
    """Container for admin configuration derived from environment variables."""

    secret_key: str = "change-me"
    layout_template: str = "crudadmin/standard_layout.html"
    ajax_layout_template: str = "crudadmin/ajax_layout.html"
    dashboard_template: str = "crudadmin/dashboard.html"
    list_template: str = "crudadmin/list.html"
    edit_template: str = "crudadmin/edit.html"
    show_template: str = "crudadmin/show.html"
    admin_code_param: str = "_sonata_admin"
    route_param: str = "_route"
    xml_http_request_param: str = "_xml_http_request"
    submit_method: str = "POST"
    flash_session_key: str = "_flashes"
    per_page: int = 25

    def __post_init__(self) -> None:
        """Normalise values that are compared verbatim at request time."""

        self.submit_method = self.submit_method.strip().upper() or "POST"
        if self.per_page < 1:
            self.per_page = 1

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        *,
        prefix: str = "CRUDADMIN_",
    ) -> "CrudAdminSettings":
        """Build a settings instance from environment variables."""
        source = env if env is not None else os.environ
        data = {key[len(prefix) :]: value for key, value in source.items() if key.startswith(prefix)}
        defaults = cls()
        return cls(
            secret_key=data.get("SECRET_KEY") or source.get("SECRET_KEY") or defaults.secret_key,
            layout_template=data.get("LAYOUT_TEMPLATE") or defaults.layout_template,
            ajax_layout_template=data.get("AJAX_LAYOUT_TEMPLATE") or defaults.ajax_layout_template,
            dashboard_template=data.get("DASHBOARD_TEMPLATE") or defaults.dashboard_template,
            list_template=data.get("LIST_TEMPLATE") or defaults.list_template,
            edit_template=data.get("EDIT_TEMPLATE") or defaults.edit_template,
            show_template=data.get("SHOW_TEMPLATE") or defaults.show_template,
            admin_code_param=data.get("ADMIN_CODE_PARAM") or defaults.admin_code_param,
            route_param=data.get("ROUTE_PARAM") or defaults.route_param,
            xml_http_request_param=(
                data.get("XML_HTTP_REQUEST_PARAM") or defaults.xml_http_request_param
            ),
            submit_method=data.get("SUBMIT_METHOD") or defaults.submit_method,
            flash_session_key=data.get("FLASH_SESSION_KEY") or defaults.flash_session_key,
            per_page=cls._to_int(data.get("PER_PAGE"), default=defaults.per_page),
        )

    @staticmethod
    def _to_int(value: str | None, *, default: int) -> int:
        """Return an integer from ``value`` or ``default`` when conversion fails."""
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            return default


class SettingsManager:
    """Central storage for the active ``CrudAdminSettings`` instance."""

    def __init__(self, initial: CrudAdminSettings | None = None) -> None:
        """Prepare storage with an optional preconfigured ``initial`` settings."""

        self._lock = RLock()
        self._settings = initial
        self._callbacks: list[Callable[[CrudAdminSettings], None]] = []

    def configure(self, settings: CrudAdminSettings) -> None:
        """Install a new settings instance and notify observers."""
        with self._lock:
            self._settings = settings
            for callback in list(self._callbacks):
                callback(settings)

    def current(self) -> CrudAdminSettings:
        """Return the active settings, lazily initializing from the environment."""
        with self._lock:
            if self._settings is None:
                self._settings = CrudAdminSettings.from_env()
            return self._settings

    def reset(self) -> None:
        """Forget the active settings so the next read reloads the environment."""
        with self._lock:
            self._settings = None

    def register(self, callback: Callable[[CrudAdminSettings], None]) -> None:
        """Register a callback invoked whenever settings change."""
        with self._lock:
            self._callbacks.append(callback)

    def unregister(self, callback: Callable[[CrudAdminSettings], None]) -> None:
        """Remove a previously registered settings change callback if present."""
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)


_settings_manager = SettingsManager()


def configure(settings: CrudAdminSettings) -> None:
    """Public entry point to install application specific settings."""
    _settings_manager.configure(settings)


def current_settings() -> CrudAdminSettings:
    """Return the active settings instance used by crudadmin components."""
    return _settings_manager.current()


def reset_settings() -> None:
    """Drop the active settings instance."""
    _settings_manager.reset()


def register_settings_observer(callback: Callable[[CrudAdminSettings], None]) -> None:
    """Subscribe to configuration changes for global singletons."""
    _settings_manager.register(callback)


def unregister_settings_observer(callback: Callable[[CrudAdminSettings], None]) -> None:
    """Unsubscribe from configuration changes previously registered."""
    _settings_manager.unregister(callback)


__all__ = [
    "CrudAdminSettings",
    "SettingsManager",
    "configure",
    "current_settings",
    "reset_settings",
    "register_settings_observer",
    "unregister_settings_observer",
]


# The End
