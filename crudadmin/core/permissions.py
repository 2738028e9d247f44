# -*- coding: utf-8 -*-
"""
permissions

Permission names checked by the CRUD actions.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from enum import Enum


class PermAction(str, Enum):
    LIST = "LIST"
    SHOW = "SHOW"
    CREATE = "CREATE"
    EDIT = "EDIT"
    DELETE = "DELETE"


__all__ = ["PermAction"]


# The End
