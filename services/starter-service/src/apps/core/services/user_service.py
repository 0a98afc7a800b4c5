# services/starter-service/src/apps/core/services/user_service.py
"""
User Service - account management and the self-service workflows

Handles:
- User CRUD (generic entity operations)
- Registration with email verification
- Password reset and change
- Enabling and disabling accounts
"""

import logging
from typing import Optional

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from apps.core.models import User, Role
from apps.core.tasks import send_verification_email, send_password_reset_email
from .base import (
    GenericEntityService,
    EntityExistsError,
    EntityNotFoundError,
    PasswordPolicyError,
)
from .token_service import VerificationTokenService, PasswordResetTokenService

logger = logging.getLogger(__name__)


class UserService(GenericEntityService):
    """
    User management service.

    Accounts created through the CRUD endpoints have no usable password
    until one is set through a reset or a password change.
    """

    model = User

    def __init__(self):
        self.verification_tokens = VerificationTokenService()
        self.reset_tokens = PasswordResetTokenService()

    def prepare_new(self, user: User) -> None:
        user.email = (user.email or '').strip().lower()
        if not user.password:
            user.set_unusable_password()

    # ==================== LOOKUPS ====================

    def find_by_username_or_email(self, username: str = None, email: str = None) -> Optional[User]:
        return User.objects.find_by_username_or_email(
            username=(username or '').strip(),
            email=(email or '').strip(),
        )

    def get_by_email(self, email: str) -> User:
        user = User.objects.find_by_email(email)
        if user is None:
            raise EntityNotFoundError(self.type_name, email)
        return user

    # ==================== REGISTRATION ====================

    @transaction.atomic
    def register(self, username: str, email: str, password: str) -> User:
        """
        Register a new account and send its verification email.

        Raises:
            EntityExistsError: username or email already taken
            PasswordPolicyError: password rejected by the validators
        """
        username = username.strip()
        email = email.strip().lower()

        if (User.objects.exists_by_id_or_name(name=username)
                or User.objects.exists_by_id_or_name(name=email)):
            raise EntityExistsError(self.type_name, username)

        user = User(
            username=username,
            email=email,
            role=Role.objects.find_by_name_ignore_case(Role.USER),
        )
        self._validate_password(password, user)
        user.set_password(password)

        if not User.objects.add(user):
            raise EntityExistsError(self.type_name, username)

        token = self.verification_tokens.issue(user)
        self._send_after_commit(send_verification_email, user, token.code)

        logger.info(f"User registered: {user.username} ({user.email})")
        return user

    @transaction.atomic
    def verify(self, pk, code: str) -> User:
        """
        Mark the user verified using their verification code.

        Raises:
            EntityNotFoundError: unknown user
            InvalidTokenError: wrong, expired or used code
        """
        user = self.get(pk)
        self.verification_tokens.consume(user, code)

        user.verified = True
        user.save(update_fields=['verified'])

        logger.info(f"Email verified: {user.email}")
        return user

    @transaction.atomic
    def send_verification(self, email: str):
        """
        Issue a fresh verification token for an unverified user.

        Returns the token, or None when the user is already verified.

        Raises:
            EntityNotFoundError: unknown email
        """
        user = self.get_by_email(email)
        if user.verified:
            logger.info(f"Verification not sent, already verified: {user.email}")
            return None

        token = self.verification_tokens.issue(user)
        self._send_after_commit(send_verification_email, user, token.code)

        logger.info(f"Verification email resent: {user.email}")
        return token

    # ==================== PASSWORD MANAGEMENT ====================

    @transaction.atomic
    def request_password_reset(self, email: str):
        """
        Issue a reset token and email it.

        Returns the token, or None for an unknown or disabled account so the
        caller cannot tell whether the email exists.
        """
        user = User.objects.find_by_email(email)
        if user is None or not user.enabled:
            logger.info(f"Password reset requested for unknown email: {email}")
            return None

        token = self.reset_tokens.issue(user)
        self._send_after_commit(send_password_reset_email, user, token.code)

        logger.info(f"Password reset requested: {user.email}")
        return token

    @transaction.atomic
    def reset_password(self, email: str, code: str, new_password: str) -> User:
        """
        Set a new password using a reset code.

        Raises:
            EntityNotFoundError: unknown email
            InvalidTokenError: wrong, expired or used code
            PasswordPolicyError: password rejected by the validators
        """
        user = self.get_by_email(email)
        token = self.reset_tokens.validate(user, code)
        self._validate_password(new_password, user)

        user.set_password(new_password)
        user.save(update_fields=['password'])
        self.reset_tokens.use(token)

        logger.info(f"Password reset completed: {user.email}")
        return user

    @transaction.atomic
    def change_password(self, pk, new_password: str) -> User:
        user = self.get(pk)
        self._validate_password(new_password, user)

        user.set_password(new_password)
        user.touch()
        user.save(update_fields=['password', 'modified_at'])

        logger.info(f"Password changed: {user.email}")
        return user

    # ==================== STATUS ====================

    @transaction.atomic
    def activate(self, pk, enabled: bool) -> User:
        user = self.get(pk)
        user.enabled = enabled
        user.touch()
        user.save(update_fields=['enabled', 'modified_at'])

        logger.info(f"User {'enabled' if enabled else 'disabled'}: {user.username}")
        return user

    @staticmethod
    def _send_after_commit(task, user: User, code: str) -> None:
        """Queue an email task once the current transaction commits; the worker reads the user row"""
        user_id = str(user.id)
        transaction.on_commit(lambda: task.delay(user_id, code))

    def _validate_password(self, password: str, user: User = None) -> None:
        try:
            validate_password(password, user)
        except DjangoValidationError as e:
            raise PasswordPolicyError(list(e.messages))
