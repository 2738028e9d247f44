# -*- coding: utf-8 -*-
"""
exceptions

Custom domain exceptions for the admin core.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Any, Iterable


class AdminError(Exception):
    """Base class for admin-specific exceptions."""


class ValidationFailure(AdminError):
    """Raised when submitted form data does not satisfy the form schema."""

    def __init__(self, errors: Iterable[dict[str, Any]] | None = None) -> None:
        self.errors: list[dict[str, Any]] = list(errors or [])
        super().__init__(f"{len(self.errors)} validation error(s)")

    @classmethod
    def from_pydantic(cls, exc: Any) -> "ValidationFailure":
        """Build a failure from a ``pydantic.ValidationError``."""
        return cls(exc.errors())

    def field_errors(self) -> dict[str, list[str]]:
        """Return error messages grouped by top-level field name."""
        grouped: dict[str, list[str]] = {}
        for error in self.errors:
            loc = error.get("loc") or ("__all__",)
            grouped.setdefault(str(loc[0]), []).append(str(error.get("msg", "")))
        return grouped


# --- HTTP-like domain errors -------------------------------------------------

class HTTPError(AdminError):
    """Base class for exceptions carrying an HTTP status code."""

    status_code: int = 500

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or "")
        self.detail = detail


class ConfigurationError(HTTPError):
    """Raised when the admin wiring is incomplete or inconsistent."""

    status_code = 500


class PermissionDenied(HTTPError):
    """Raised when the admin handle refuses an operation."""

    status_code = 403


class NotFound(HTTPError):
    """Raised when a requested object does not exist."""

    status_code = 404


class InvalidRequest(HTTPError):
    """Raised when an action is called with an unsupported HTTP method."""

    status_code = 405


__all__ = [
    "AdminError",
    "ValidationFailure",
    "HTTPError",
    "ConfigurationError",
    "PermissionDenied",
    "NotFound",
    "InvalidRequest",
]


# The End
