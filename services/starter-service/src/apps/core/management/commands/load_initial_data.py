# services/starter-service/src/apps/core/management/commands/load_initial_data.py
from django.core.management.base import BaseCommand

from apps.core.services import InitialDataLoader


class Command(BaseCommand):
    help = 'Create the default permissions, roles, administrator account and types if missing'

    def handle(self, *args, **options):
        created = InitialDataLoader().load()
        summary = ', '.join(f"{count} {kind}" for kind, count in created.items())
        self.stdout.write(self.style.SUCCESS(f"Initial data loaded: {summary}"))
