# -*- coding: utf-8 -*-
"""
__init__

Persistence adapters satisfying the admin collaborator contracts.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .tortoise import ProxyQuery, TortoiseDatagrid, TortoiseModelManager

__all__ = ["ProxyQuery", "TortoiseDatagrid", "TortoiseModelManager"]

# The End
