# services/starter-service/src/apps/core/services/__init__.py
"""
Starter Service - Business Logic Layer

This module exports all service classes for the Starter Service including:
- GenericEntityService: CRUD shared by every managed entity
- UserService: accounts, registration, verification, password reset
- TypeService, RoleService, PermissionService: generic entities and RBAC
- VerificationTokenService, PasswordResetTokenService: token lifecycle
- AuthService: password login and JWT access tokens
- InitialDataLoader: seeding of permissions, roles, admin and types
"""

from .base import (
    GenericEntityService,
    ServiceError,
    EntityNotFoundError,
    EntityExistsError,
    InvalidTokenError,
    PasswordPolicyError,
)

from .token_service import (
    UserTokenService,
    VerificationTokenService,
    PasswordResetTokenService,
    purge_expired_tokens,
)

from .user_service import UserService
from .type_service import TypeService
from .role_service import RoleService, PermissionService

from .auth_service import (
    AuthService,
    AuthenticationError,
    InvalidCredentialsError,
    AccountInactiveError,
)

from .initial_data import InitialDataLoader, seed_initial_data

__all__ = [
    # Generic
    'GenericEntityService',
    'ServiceError',
    'EntityNotFoundError',
    'EntityExistsError',
    'InvalidTokenError',
    'PasswordPolicyError',

    # Tokens
    'UserTokenService',
    'VerificationTokenService',
    'PasswordResetTokenService',
    'purge_expired_tokens',

    # Entities
    'UserService',
    'TypeService',
    'RoleService',
    'PermissionService',

    # Auth
    'AuthService',
    'AuthenticationError',
    'InvalidCredentialsError',
    'AccountInactiveError',

    # Initial data
    'InitialDataLoader',
    'seed_initial_data',
]
