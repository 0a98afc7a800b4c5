# services/starter-service/src/apps/core/services/auth_service.py
"""
Authentication Service

Exchanges username (or email) and password for a JWT access token and
resolves token payloads back to users.
"""

import logging
from typing import Dict

from django.utils import timezone

from shared.common.authentication import JWTTokenGenerator
from apps.core.models import User, parse_uuid

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Base exception for authentication errors"""
    def __init__(self, message: str, code: str = 'auth_error', details: Dict = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)


class InvalidCredentialsError(AuthenticationError):
    """Invalid username or password"""
    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message, 'invalid_credentials')


class AccountInactiveError(AuthenticationError):
    """Account is disabled"""
    def __init__(self):
        super().__init__("Account is disabled", 'account_inactive')


class AuthService:
    """Password login issuing Bearer access tokens"""

    TOKEN_TYPE = 'Bearer'

    def obtain_token(self, username: str, password: str) -> Dict:
        """
        Authenticate with username or email and password.

        Raises:
            InvalidCredentialsError: unknown user or wrong password
            AccountInactiveError: account disabled
        """
        identifier = (username or '').strip()
        user = User.objects.find_by_username_or_email(username=identifier, email=identifier)
        if user is None:
            logger.warning(f"Login attempt for unknown user: {identifier}")
            raise InvalidCredentialsError()

        if not user.check_password(password):
            logger.warning(f"Login failed, wrong password: {user.username}")
            raise InvalidCredentialsError()

        if not user.enabled:
            raise AccountInactiveError()

        user.last_login = timezone.now()
        user.save(update_fields=['last_login'])

        logger.info(f"User logged in: {user.username}")
        return self._generate_tokens(user)

    def get_user_for_payload(self, payload: Dict) -> User:
        """
        Resolve an access token payload to an enabled user.

        Raises:
            AuthenticationError: wrong token type, unknown or disabled user
        """
        if payload.get('type') != 'access':
            raise AuthenticationError('Invalid token type', 'invalid_token')

        user_id = parse_uuid(payload.get('sub'))
        user = User.objects.filter(id=user_id).select_related('role').first() if user_id else None
        if user is None:
            raise AuthenticationError('User not found', 'user_not_found')
        if not user.enabled:
            raise AccountInactiveError()
        return user

    def _generate_tokens(self, user: User) -> Dict:
        access_token = JWTTokenGenerator.generate_access_token(
            user_id=str(user.id),
            username=user.username,
            email=user.email,
            role=user.role_name,
        )
        return {
            'access_token': access_token,
            'token_type': self.TOKEN_TYPE,
            'expires_in': JWTTokenGenerator.access_token_lifetime_seconds(),
        }
