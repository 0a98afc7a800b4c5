# services/starter-service/src/config/celery.py
"""
Celery application for Starter Service.

Configuration comes from Django settings keys prefixed with ``CELERY_``.
"""

import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

app = Celery('starter')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()
