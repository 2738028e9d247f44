# -*- coding: utf-8 -*-
"""
outcome

Tagged results produced by every admin action.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Union


@dataclass(frozen=True)
class Redirect:
    """Send the client to ``url``."""

    url: str
    status: int = 302


@dataclass(frozen=True)
class Render:
    """Render ``template`` with ``context``."""

    template: str
    context: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Json:
    """Serialise ``payload`` with the given status and content type."""

    payload: Any
    status: int = 200
    content_type: str = "application/json"
    headers: Dict[str, str] = field(default_factory=dict)


ActionOutcome = Union[Redirect, Render, Json]


__all__ = ["ActionOutcome", "Redirect", "Render", "Json"]


# The End
