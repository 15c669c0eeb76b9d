"""Celery application for the CRM's background jobs."""
import os

from celery import Celery
from celery.schedules import crontab

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("crm")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()

app.conf.beat_schedule = {
    # Both run in CELERY_TIMEZONE (Europe/Stockholm).
    "billing-refresh-open-month": {
        "task": "billing.tasks.refresh_open_commission_statement",
        "schedule": crontab(minute=0, hour=2),
    },
    "billing-close-commission-month": {
        "task": "billing.tasks.close_commission_month",
        "schedule": crontab(minute=30, hour=0),  # acts on the 1st only
    },
}
