# services/starter-service/src/apps/core/apps.py
from django.apps import AppConfig
from django.db.models.signals import post_migrate


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core'
    label = 'core'
    verbose_name = 'Starter'

    def ready(self):
        from apps.core.services.initial_data import seed_initial_data

        post_migrate.connect(
            seed_initial_data,
            sender=self,
            dispatch_uid='apps.core.seed_initial_data',
        )
