# services/starter-service/src/apps/core/tests/conftest.py
"""
Pytest Configuration and Fixtures

Provides common fixtures for all Starter Service tests. The test database
already holds the initial data (permissions, Admin/User roles, the admin
account and the initial types) seeded on migrate.
"""

import pytest
import uuid

from rest_framework.test import APIClient

from apps.core.models import User, Role, Type
from apps.core.services import (
    AuthService,
    UserService,
    TypeService,
    VerificationTokenService,
    PasswordResetTokenService,
    InitialDataLoader,
)


# ==================== CLIENT FIXTURES ====================

@pytest.fixture
def api_client() -> APIClient:
    """Return a DRF API client instance."""
    return APIClient()


# ==================== ROLE FIXTURES ====================

@pytest.fixture
def admin_role(db) -> Role:
    """The seeded role holding every permission."""
    return Role.objects.find_by_name_ignore_case(Role.ADMIN)


@pytest.fixture
def user_role(db) -> Role:
    """The seeded role holding read permissions."""
    return Role.objects.find_by_name_ignore_case(Role.USER)


# ==================== USER FIXTURES ====================

@pytest.fixture
def user_password() -> str:
    """Standard password for test users."""
    return 'TestPassword123!'


@pytest.fixture
def create_user(db, user_password):
    """Factory fixture to create test users."""
    def _create_user(
        username: str = None,
        email: str = None,
        password: str = None,
        role: Role = None,
        enabled: bool = True,
        verified: bool = False,
        **kwargs
    ) -> User:
        suffix = uuid.uuid4().hex[:8]
        return User.objects.create_user(
            username=username or f"user_{suffix}",
            email=email or f"user_{suffix}@test.com",
            password=password or user_password,
            role=role,
            enabled=enabled,
            verified=verified,
            **kwargs
        )

    return _create_user


@pytest.fixture
def admin_user(create_user, admin_role) -> User:
    """Create a verified user with the Admin role."""
    return create_user(
        username='root',
        email='root@test.com',
        role=admin_role,
        verified=True,
    )


@pytest.fixture
def regular_user(create_user, user_role) -> User:
    """Create a verified user with the read-only User role."""
    return create_user(
        username='reader',
        email='reader@test.com',
        role=user_role,
        verified=True,
    )


@pytest.fixture
def unverified_user(create_user, user_role) -> User:
    """Create a user pending email verification."""
    return create_user(
        username='pending',
        email='pending@test.com',
        role=user_role,
        verified=False,
    )


# ==================== SERVICE FIXTURES ====================

@pytest.fixture
def auth_service() -> AuthService:
    return AuthService()


@pytest.fixture
def user_service() -> UserService:
    return UserService()


@pytest.fixture
def type_service() -> TypeService:
    return TypeService()


@pytest.fixture
def verification_token_service() -> VerificationTokenService:
    return VerificationTokenService()


@pytest.fixture
def reset_token_service() -> PasswordResetTokenService:
    return PasswordResetTokenService()


@pytest.fixture
def initial_data() -> InitialDataLoader:
    """Describes what the test database was seeded with."""
    return InitialDataLoader()


# ==================== AUTHENTICATED CLIENTS ====================

def _login(client: APIClient, auth_service: AuthService, user: User, password: str) -> APIClient:
    result = auth_service.obtain_token(username=user.username, password=password)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {result['access_token']}")
    return client


@pytest.fixture
def admin_client(api_client, admin_user, auth_service, user_password) -> APIClient:
    """Return an API client authenticated as an Admin."""
    return _login(api_client, auth_service, admin_user, user_password)


@pytest.fixture
def user_client(regular_user, auth_service, user_password) -> APIClient:
    """Return an API client authenticated with read-only permissions."""
    return _login(APIClient(), auth_service, regular_user, user_password)


# ==================== TYPE FIXTURES ====================

@pytest.fixture
def create_type(db):
    """Factory fixture to create Type records."""
    def _create_type(name: str = None, **kwargs) -> Type:
        return Type.objects.create(name=name or f"type_{uuid.uuid4().hex[:8]}", **kwargs)

    return _create_type
