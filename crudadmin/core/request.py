# -*- coding: utf-8 -*-
"""
request

Framework-neutral request value consumed by the CRUD dispatcher.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, MutableMapping

from starlette.requests import Request

logger = logging.getLogger(__name__)

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"", "0", "false", "no", "off", "null", "none"}


def to_bool(value: Any) -> bool:
    """Interpret request parameter ``value`` as a boolean flag."""

    if isinstance(value, (list, tuple)):
        return any(to_bool(item) for item in value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in _FALSE_VALUES:
            return False
        if normalized in _TRUE_VALUES:
            return True
        return True
    return bool(value)


@dataclass
class RequestContext:
    """HTTP method, merged parameters, headers and session of one request."""

    method: str = "GET"
    params: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    session: MutableMapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.method = self.method.upper()
        self.headers = {str(k).lower(): str(v) for k, v in self.headers.items()}

    @property
    def content_type(self) -> str:
        """Return the raw ``Content-Type`` header or an empty string."""
        return self.headers.get("content-type", "")

    def get(self, name: str, default: Any = None) -> Any:
        """Return parameter ``name`` or ``default``."""
        return self.params.get(name, default)

    def get_list(self, name: str) -> list[Any]:
        """Return parameter ``name`` as a list; absent means empty."""
        value = self.params.get(name)
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [item for item in value if item not in (None, "")]
        if value == "":
            return []
        return [value]

    def get_bool(self, name: str, default: bool = False) -> bool:
        """Return parameter ``name`` interpreted as a boolean flag."""
        if name not in self.params:
            return default
        return to_bool(self.params[name])

    def get_header(self, name: str, default: str | None = None) -> str | None:
        """Return header ``name`` using case-insensitive lookup."""
        return self.headers.get(name.lower(), default)

    def is_xml_http_request(self) -> bool:
        """Return ``True`` when the transport flags the request as AJAX."""
        return (self.get_header("x-requested-with") or "").lower() == "xmlhttprequest"

    def is_asynchronous(self, override_param: str) -> bool:
        """Return ``True`` for AJAX requests or when ``override_param`` is truthy."""
        return self.is_xml_http_request() or self.get_bool(override_param)

    @staticmethod
    def merge_items(items: Iterable[tuple[str, Any]], into: dict[str, Any]) -> None:
        """Merge multi-valued ``items`` into ``into``.

        Repeated keys collect into lists and ``name[]`` keys are stored under
        ``name`` as lists.
        """

        for key, value in items:
            if key.endswith("[]"):
                key = key[:-2]
                current = into.get(key)
                if isinstance(current, list):
                    current.append(value)
                elif current is None:
                    into[key] = [value]
                else:
                    into[key] = [current, value]
                continue
            if key in into:
                current = into[key]
                if isinstance(current, list):
                    current.append(value)
                else:
                    into[key] = [current, value]
            else:
                into[key] = value

    @classmethod
    async def from_request(
        cls,
        request: Request,
        *,
        extra: Mapping[str, Any] | None = None,
    ) -> "RequestContext":
        """Build a context from a Starlette ``request``.

        Form fields override query parameters; path parameters and ``extra``
        (route defaults such as the admin code) override both.
        """

        params: dict[str, Any] = {}
        cls.merge_items(request.query_params.multi_items(), params)
        content_type = request.headers.get("content-type", "")
        if request.method not in ("GET", "HEAD") and content_type.startswith(_FORM_CONTENT_TYPES):
            form = await request.form()
            form_params: dict[str, Any] = {}
            cls.merge_items(form.multi_items(), form_params)
            params.update(form_params)
        params.update(request.path_params)
        if extra:
            params.update(extra)

        if "session" in request.scope:
            session: MutableMapping[str, Any] = request.session
        else:
            logger.debug("SessionMiddleware is not installed; flash messages are discarded")
            session = {}

        return cls(
            method=request.method,
            params=params,
            headers=dict(request.headers.items()),
            session=session,
        )


__all__ = ["RequestContext", "to_bool"]


# The End
