# shared/common/authentication.py
"""
JWT token generation and decoding
"""

import jwt
import uuid
import logging
from datetime import datetime, timezone
from typing import Dict
from django.conf import settings

logger = logging.getLogger(__name__)


class JWTTokenGenerator:
    """
    Generate and decode JWT access tokens.

    Reads ``settings.JWT_SETTINGS``:
        SIGNING_KEY, ALGORITHM, ACCESS_TOKEN_LIFETIME (timedelta), ISSUER
    """

    @staticmethod
    def access_token_lifetime_seconds() -> int:
        return int(settings.JWT_SETTINGS['ACCESS_TOKEN_LIFETIME'].total_seconds())

    @staticmethod
    def generate_access_token(
        user_id: str,
        username: str,
        email: str,
        role: str = None,
        extra_claims: Dict = None
    ) -> str:
        """Generate an access token"""
        now = datetime.now(timezone.utc)

        payload = {
            'sub': user_id,
            'username': username,
            'email': email,
            'role': role,
            'jti': str(uuid.uuid4()),
            'iat': now,
            'exp': now + settings.JWT_SETTINGS['ACCESS_TOKEN_LIFETIME'],
            'iss': settings.JWT_SETTINGS['ISSUER'],
            'type': 'access',
        }

        if extra_claims:
            payload.update(extra_claims)

        return jwt.encode(
            payload,
            settings.JWT_SETTINGS['SIGNING_KEY'],
            algorithm=settings.JWT_SETTINGS['ALGORITHM']
        )

    @staticmethod
    def decode_token(token: str, verify_exp: bool = True) -> Dict:
        """Decode and verify a token. Raises ``jwt.InvalidTokenError`` subclasses."""
        return jwt.decode(
            token,
            settings.JWT_SETTINGS['SIGNING_KEY'],
            algorithms=[settings.JWT_SETTINGS['ALGORITHM']],
            issuer=settings.JWT_SETTINGS['ISSUER'],
            options={
                'require': ['exp', 'iat', 'sub', 'iss'],
                'verify_exp': verify_exp,
            }
        )
