# services/starter-service/src/apps/core/services/token_service.py
"""
Token Service - verification and password reset token lifecycle

Each user holds at most one token of each kind. Issuing replaces the code
and expiry; using a token sets its expiry to the current time.
"""

import logging
from typing import Dict

from django.db import transaction
from django.utils import timezone

from apps.core.models import User, VerificationToken, PasswordResetToken, parse_uuid
from .base import EntityNotFoundError, InvalidTokenError

logger = logging.getLogger(__name__)


class UserTokenService:
    """Lifecycle of one token model"""

    model = None
    label = 'token'

    def find_all(self):
        return self.model.objects.select_related('user')

    def find_by_id(self, pk):
        pk = parse_uuid(pk)
        if pk is None:
            return None
        return self.model.objects.filter(pk=pk).first()

    def find_by_user(self, user: User):
        return self.model.objects.filter(user=user).first()

    @transaction.atomic
    def delete_by_id(self, pk) -> None:
        token = self.find_by_id(pk)
        if token is None:
            raise EntityNotFoundError(self.model.__name__, pk)
        token.delete()

    @transaction.atomic
    def issue(self, user: User):
        """Create the user's token, or replace its code and expiry"""
        token, created = self.model.objects.update_or_create(
            user=user,
            defaults={
                'code': self.model.generate_code(),
                'expiry_date': self.model.calculate_expiry_date(),
            }
        )
        logger.info(
            f"{self.model.__name__} {'issued' if created else 'reissued'} for user {user.pk}"
        )
        return token

    def validate(self, user: User, code: str):
        """
        Return the user's token when ``code`` matches and it has not expired.

        Raises:
            InvalidTokenError: no token, wrong code, or expired
        """
        token = self.find_by_user(user)
        if token is None or not token.matches(code):
            raise InvalidTokenError(f"Invalid {self.label} token")
        if token.is_expired:
            raise InvalidTokenError(f"{self.label.capitalize()} token has expired")
        return token

    def use(self, token) -> None:
        """Invalidate the token by moving its expiry to now"""
        token.expiry_date = timezone.now()
        token.save(update_fields=['expiry_date'])
        logger.info(f"{self.model.__name__} used by user {token.user_id}")

    @transaction.atomic
    def consume(self, user: User, code: str):
        """Validate and use in one step"""
        token = self.validate(user, code)
        self.use(token)
        return token

    def purge_expired(self) -> int:
        deleted, _ = self.model.objects.expired().delete()
        if deleted:
            logger.info(f"Purged {deleted} expired {self.model.__name__} rows")
        return deleted


class VerificationTokenService(UserTokenService):
    model = VerificationToken
    label = 'verification'


class PasswordResetTokenService(UserTokenService):
    model = PasswordResetToken
    label = 'password reset'


def purge_expired_tokens() -> Dict[str, int]:
    """Delete expired tokens of every kind"""
    return {
        'verification_tokens': VerificationTokenService().purge_expired(),
        'password_reset_tokens': PasswordResetTokenService().purge_expired(),
    }
