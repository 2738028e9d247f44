# -*- coding: utf-8 -*-
"""
pool

Process-wide registry of admin handles keyed by admin code.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

from .exceptions import ConfigurationError
from .interface import AdminHandle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _PoolEntry:
    """Registration metadata for one admin handle."""

    code: str
    group: str
    label: str


class AdminPool:
    """Store admin handles during startup and serve lookups afterwards."""

    default_group = "default"

    def __init__(self, admins: Iterable[AdminHandle] | None = None) -> None:
        self._admins: Dict[str, AdminHandle] = {}
        self._entries: List[_PoolEntry] = []
        self._frozen = False
        for admin in admins or ():
            self.register(admin)

    @property
    def frozen(self) -> bool:
        """Return ``True`` once the pool no longer accepts registrations."""
        return self._frozen

    def register(
        self,
        admin: AdminHandle,
        *,
        code: str | None = None,
        group: str | None = None,
        label: str | None = None,
    ) -> AdminHandle:
        """Register ``admin`` under ``code`` (defaults to ``admin.code``)."""

        if self._frozen:
            raise ConfigurationError("The admin pool is frozen; register admins at startup")
        admin_code = code or getattr(admin, "code", None)
        if not admin_code:
            raise ConfigurationError(f"Admin {admin!r} has no code")
        if admin_code in self._admins:
            raise ConfigurationError(f"An admin is already registered under `{admin_code}`")
        self._admins[admin_code] = admin
        entry_label = label or self._label_of(admin) or admin_code
        entry_group = group or getattr(admin, "group", None) or self.default_group
        self._entries.append(_PoolEntry(code=admin_code, group=entry_group, label=entry_label))
        logger.debug("Registered admin %s in group %s", admin_code, entry_group)
        return admin

    def freeze(self) -> None:
        """Make the pool read-only."""
        self._frozen = True

    def get_admin_by_code(self, code: str) -> AdminHandle | None:
        """Return the admin registered under ``code`` or ``None``."""
        return self._admins.get(code)

    def has_admin(self, code: str) -> bool:
        return code in self._admins

    def get_admin_codes(self) -> List[str]:
        return [entry.code for entry in self._entries]

    def get_dashboard_groups(self) -> List[Dict[str, Any]]:
        """Return admins grouped for the dashboard, in registration order.

        Child admins are reachable through their parent and are skipped.
        """

        groups: Dict[str, Dict[str, Any]] = {}
        for entry in self._entries:
            admin = self._admins[entry.code]
            is_child = getattr(admin, "is_child", None)
            if callable(is_child) and is_child():
                continue
            group = groups.setdefault(entry.group, {"label": entry.group, "items": []})
            group["items"].append({"code": entry.code, "label": entry.label, "admin": admin})
        return list(groups.values())

    @staticmethod
    def _label_of(admin: AdminHandle) -> str | None:
        getter = getattr(admin, "get_label", None)
        if callable(getter):
            return getter()
        return None


__all__ = ["AdminPool"]


# The End
