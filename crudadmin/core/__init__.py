# -*- coding: utf-8 -*-
"""
__init__

Request dispatch, admin handle contracts and their default implementations.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .admin import BaseAdminHandle
from .dashboard import CoreDispatcher
from .dispatcher import CrudDispatcher, batch_handler
from .exceptions import (
    AdminError,
    ConfigurationError,
    HTTPError,
    InvalidRequest,
    NotFound,
    PermissionDenied,
    ValidationFailure,
)
from .outcome import ActionOutcome, Json, Redirect, Render
from .permissions import PermAction
from .pool import AdminPool
from .request import RequestContext
from .scope import AdminScope

__all__ = [
    "ActionOutcome",
    "AdminError",
    "AdminPool",
    "AdminScope",
    "BaseAdminHandle",
    "ConfigurationError",
    "CoreDispatcher",
    "CrudDispatcher",
    "HTTPError",
    "InvalidRequest",
    "Json",
    "NotFound",
    "PermAction",
    "PermissionDenied",
    "Redirect",
    "Render",
    "RequestContext",
    "ValidationFailure",
    "batch_handler",
]

# The End
