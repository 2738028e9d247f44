# -*- coding: utf-8 -*-
"""
scope

Request-scoped binding of an admin handle.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .interface import AdminHandle
from .request import RequestContext


@dataclass
class AdminScope:
    """Admin handle, its root and the request being served.

    Pooled handles are shared between requests, so the current subject and
    the child flag live here instead of on the handle.
    """

    admin: AdminHandle
    root: AdminHandle
    request: RequestContext
    current_child: bool = False
    subject: Any = None

    def set_subject(self, obj: Any) -> None:
        self.subject = obj


__all__ = ["AdminScope"]


# The End
