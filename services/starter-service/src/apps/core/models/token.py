# services/starter-service/src/apps/core/models/token.py
"""
Single-use tokens for email verification and password reset
"""

import secrets
from datetime import timedelta

from django.db import models
from django.utils import timezone
from django.conf import settings

from shared.common.mixins import UUIDPrimaryKeyMixin


class TokenQuerySet(models.QuerySet):

    def expired(self, now=None):
        return self.filter(expiry_date__lt=now or timezone.now())


class AbstractUserToken(UUIDPrimaryKeyMixin):
    """
    One token per user. Using a token moves its expiry date to the moment of
    use, so a used token is always expired.

    Subclasses set ``EXPIRY_SETTING`` to the settings key holding the
    lifetime in hours.
    """

    EXPIRY_SETTING = None
    DEFAULT_EXPIRY_HOURS = 24

    user = models.OneToOneField(
        'core.User',
        on_delete=models.CASCADE,
        related_name='%(class)s'
    )
    code = models.CharField(max_length=255, unique=True, db_index=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    expiry_date = models.DateTimeField(db_index=True)

    objects = TokenQuerySet.as_manager()

    class Meta:
        abstract = True
        ordering = ['-created_at']

    def __str__(self):
        return f"{type(self).__name__} for {self.user.email}"

    @property
    def is_expired(self):
        return timezone.now() >= self.expiry_date

    @property
    def is_valid(self):
        return not self.is_expired

    def matches(self, code) -> bool:
        return bool(code) and secrets.compare_digest(self.code.encode(), str(code).encode())

    @staticmethod
    def generate_code() -> str:
        return secrets.token_urlsafe(32)

    @classmethod
    def expiry_hours(cls) -> int:
        return int(getattr(settings, cls.EXPIRY_SETTING, cls.DEFAULT_EXPIRY_HOURS))

    @classmethod
    def calculate_expiry_date(cls, now=None):
        return (now or timezone.now()) + timedelta(hours=cls.expiry_hours())


class VerificationToken(AbstractUserToken):
    """Token confirming a user's email address"""

    EXPIRY_SETTING = 'EMAIL_VERIFICATION_TOKEN_EXPIRY'

    class Meta(AbstractUserToken.Meta):
        db_table = 'verification_tokens'


class PasswordResetToken(AbstractUserToken):
    """Token allowing a password reset without the old password"""

    EXPIRY_SETTING = 'PASSWORD_RESET_TOKEN_EXPIRY'

    class Meta(AbstractUserToken.Meta):
        db_table = 'password_reset_tokens'
