"""
Celery application for stallplass.

Periodic tasks are scheduled through django-celery-beat's database scheduler.
"""

import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'stallplass.settings')

app = Celery('stallplass')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()
