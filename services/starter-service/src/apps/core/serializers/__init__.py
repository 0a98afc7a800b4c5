# services/starter-service/src/apps/core/serializers/__init__.py
"""
Starter Service Serializers

This module exports all serializers for the Starter Service API including:
- Generic entity base serializer
- User serializers (CRUD, registration, passwords, activation)
- Type serializer
- Role and Permission serializers (RBAC)
- Authentication serializers (token request/response)
"""

from .base import GenericEntitySerializer, UserReferenceField

from .user import (
    UserSerializer,
    RegisterSerializer,
    PasswordChangeSerializer,
    PasswordResetConfirmSerializer,
    ActivateSerializer,
)

from .type import TypeSerializer

from .role import PermissionSerializer, RoleSerializer

from .auth import TokenObtainSerializer, TokenResponseSerializer

__all__ = [
    # Base
    'GenericEntitySerializer',
    'UserReferenceField',

    # User
    'UserSerializer',
    'RegisterSerializer',
    'PasswordChangeSerializer',
    'PasswordResetConfirmSerializer',
    'ActivateSerializer',

    # Type
    'TypeSerializer',

    # RBAC
    'PermissionSerializer',
    'RoleSerializer',

    # Auth
    'TokenObtainSerializer',
    'TokenResponseSerializer',
]
