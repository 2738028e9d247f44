# -*- coding: utf-8 -*-
"""
flash

Session-backed flash messages.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Any, Dict, List, MutableMapping


class FlashCategory:
    """Categories used by the CRUD actions."""

    SUCCESS = "crudadmin_flash_success"
    ERROR = "crudadmin_flash_error"
    NOTICE = "crudadmin_flash_notice"


class SessionFlashBag:
    """Store flash messages in a session mapping until they are consumed."""

    def __init__(self, session: MutableMapping[str, Any], key: str = "_flashes") -> None:
        self._session = session
        self._key = key

    def set_flash(self, category: str, message_key: str) -> None:
        """Queue ``message_key`` under ``category``."""
        bag: Dict[str, List[str]] = dict(self._session.get(self._key) or {})
        messages = list(bag.get(category, []))
        messages.append(message_key)
        bag[category] = messages
        # reassign so cookie-backed sessions notice the change
        self._session[self._key] = bag

    def peek(self, category: str | None = None) -> Dict[str, List[str]] | List[str]:
        """Return queued messages without consuming them."""
        bag = self._session.get(self._key) or {}
        if category is None:
            return {name: list(items) for name, items in bag.items()}
        return list(bag.get(category, []))

    def pop_all(self) -> Dict[str, List[str]]:
        """Return and clear every queued message."""
        bag = self._session.pop(self._key, None) or {}
        return {name: list(items) for name, items in bag.items()}


__all__ = ["FlashCategory", "SessionFlashBag"]


# The End
