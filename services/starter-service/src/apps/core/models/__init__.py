# services/starter-service/src/apps/core/models/__init__.py
"""
Starter Service Models

This module exports all models for the Starter Service:
- Generic entity base and repository queryset
- Accounts (User)
- RBAC (Role, Permission)
- Typed entities (Type)
- Token management (VerificationToken, PasswordResetToken)
"""

from .base import AbstractGenericEntity, GenericEntityQuerySet, GenericEntityManager, parse_uuid
from .user import User
from .role import GenericOperation, Role, Permission
from .type import Type
from .token import VerificationToken, PasswordResetToken

__all__ = [
    # Generic entity
    'AbstractGenericEntity',
    'GenericEntityQuerySet',
    'GenericEntityManager',
    'parse_uuid',

    # Accounts
    'User',

    # RBAC
    'GenericOperation',
    'Role',
    'Permission',

    # Typed entities
    'Type',

    # Tokens
    'VerificationToken',
    'PasswordResetToken',
]
