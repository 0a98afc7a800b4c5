# services/starter-service/src/apps/core/management/commands/purge_expired_tokens.py
from django.core.management.base import BaseCommand

from apps.core.services import purge_expired_tokens


class Command(BaseCommand):
    help = 'Delete verification and password reset tokens past their expiry date'

    def handle(self, *args, **options):
        result = purge_expired_tokens()
        self.stdout.write(self.style.SUCCESS(
            f"Purged {result['verification_tokens']} verification and "
            f"{result['password_reset_tokens']} password reset tokens"
        ))
