# -*- coding: utf-8 -*-
"""
__init__

CRUD admin package entry point.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .conf import CrudAdminSettings, configure, current_settings
from .core import AdminPool, BaseAdminHandle, CoreDispatcher, CrudDispatcher, batch_handler
from .meta import __version__
from .responses import OutcomeResponder
from .router import CrudRouterBuilder

__all__ = [
    "AdminPool",
    "BaseAdminHandle",
    "CoreDispatcher",
    "CrudAdminSettings",
    "CrudDispatcher",
    "CrudRouterBuilder",
    "OutcomeResponder",
    "__version__",
    "batch_handler",
    "configure",
    "current_settings",
]

# The End
