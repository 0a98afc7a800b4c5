# services/starter-service/src/apps/core/views/__init__.py
"""
Starter Service Views

This module exports all ViewSets for the Starter Service API.
"""

from .base import GenericEntityViewSet
from .user import UserViewSet
from .type import TypeViewSet
from .rbac import RoleViewSet, PermissionViewSet
from .auth import AuthViewSet

__all__ = [
    'GenericEntityViewSet',
    'UserViewSet',
    'TypeViewSet',
    'RoleViewSet',
    'PermissionViewSet',
    'AuthViewSet',
]
