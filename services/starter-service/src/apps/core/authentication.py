# services/starter-service/src/apps/core/authentication.py
"""
DRF Authentication Backends

Custom authentication classes for Django REST Framework.
"""

import logging
from typing import Optional, Tuple

import jwt
from rest_framework import authentication, exceptions

from shared.common.authentication import JWTTokenGenerator
from apps.core.models import User
from apps.core.services import AuthService, AuthenticationError

logger = logging.getLogger(__name__)


class JWTAuthentication(authentication.BaseAuthentication):
    """
    JWT Authentication for Django REST Framework.

    Validates Bearer access tokens from the Authorization header and
    returns the enabled user they were issued for.
    """

    keyword = 'Bearer'

    def authenticate(self, request) -> Optional[Tuple[User, dict]]:
        """
        Authenticate the request using JWT token.

        Returns:
            Tuple of (user, payload) or None if no auth provided
        """
        auth_header = authentication.get_authorization_header(request)

        if not auth_header:
            return None

        try:
            auth_parts = auth_header.decode('utf-8').split()
        except UnicodeDecodeError:
            raise exceptions.AuthenticationFailed('Invalid token header encoding')

        if not auth_parts or auth_parts[0].lower() != self.keyword.lower():
            return None

        if len(auth_parts) != 2:
            raise exceptions.AuthenticationFailed('Invalid token header format')

        return self._authenticate_token(auth_parts[1])

    def _authenticate_token(self, token: str) -> Tuple[User, dict]:
        """Validate JWT token and return user."""
        try:
            payload = JWTTokenGenerator.decode_token(token)
        except jwt.ExpiredSignatureError:
            raise exceptions.AuthenticationFailed('Token has expired')
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid token: {e}")
            raise exceptions.AuthenticationFailed('Invalid token')

        try:
            user = AuthService().get_user_for_payload(payload)
        except AuthenticationError as e:
            raise exceptions.AuthenticationFailed(e.message)

        return (user, payload)

    def authenticate_header(self, request) -> str:
        """Return the WWW-Authenticate header value."""
        return self.keyword
