# services/starter-service/src/apps/core/tasks.py
"""
Celery Tasks for Starter Service

- Verification and password reset emails
- Periodic purge of expired tokens
"""

import logging
import smtplib
from typing import Any, Dict

from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


def _send_user_email(task, user_id: str, subject: str, message: str) -> Dict[str, Any]:
    from .models import User

    try:
        user = User.objects.get(id=user_id)
    except User.DoesNotExist:
        logger.error(f"Email not sent, user not found: {user_id}")
        return {'success': False, 'error': 'User not found'}

    try:
        send_mail(
            subject=subject,
            message=message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[user.email],
            fail_silently=False,
        )
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Failed to send '{subject}' to {user.email}: {e}")
        raise task.retry(exc=e)

    logger.info(f"Email '{subject}' sent to {user.email}")
    return {'success': True, 'recipient': user.email}


@shared_task(bind=True, name='starter.send_verification_email', max_retries=3, default_retry_delay=60)
def send_verification_email(self, user_id: str, code: str) -> Dict[str, Any]:
    """Email the verification link for ``code`` to the user"""
    link = f"{settings.FRONTEND_URL}/verify/{user_id}?token={code}"
    message = (
        "Please confirm your email address by opening the link below.\n\n"
        f"{link}\n\n"
        f"Verification code: {code}\n"
        f"The link expires in {settings.EMAIL_VERIFICATION_TOKEN_EXPIRY} hours."
    )
    return _send_user_email(self, user_id, 'Confirm your email address', message)


@shared_task(bind=True, name='starter.send_password_reset_email', max_retries=3, default_retry_delay=60)
def send_password_reset_email(self, user_id: str, code: str) -> Dict[str, Any]:
    """Email the password reset link for ``code`` to the user"""
    link = f"{settings.FRONTEND_URL}/reset-password?token={code}"
    message = (
        "A password reset was requested for your account. "
        "Open the link below to choose a new password.\n\n"
        f"{link}\n\n"
        f"Reset code: {code}\n"
        f"The link expires in {settings.PASSWORD_RESET_TOKEN_EXPIRY} hours. "
        "If you did not request a reset you can ignore this email."
    )
    return _send_user_email(self, user_id, 'Reset your password', message)


@shared_task(name='starter.purge_expired_tokens')
def purge_expired_tokens() -> Dict[str, int]:
    """Delete verification and password reset tokens past their expiry date"""
    from .services.token_service import purge_expired_tokens as purge

    result = purge()
    logger.info(f"Expired tokens purged: {result}")
    return result
