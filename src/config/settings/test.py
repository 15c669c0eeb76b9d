"""Test settings - SQLite in memory, eager Celery, pinned business defaults."""
from .base import *  # noqa: F401,F403

DEBUG = True

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}
DATABASES["default"]["ATOMIC_REQUESTS"] = False

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

# Tasks run inline; results stay in process memory
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

# Commission and credit defaults must not follow the developer's .env
TIME_ZONE = "Europe/Stockholm"
CELERY_TIMEZONE = TIME_ZONE
OPENER_COMMISSION_PER_LEAD_DEFAULT = 200
OPENER_COMMISSION_PER_DEAL_DEFAULT = 1000
CLOSER_BASE_COMMISSION_DEFAULT = 8000
CREDIT_DEADLINE_DAYS_DEFAULT = 14
CREDIT_CONFIRMATION_THRESHOLD_DAYS = 60
EMPLOYER_COST_PERCENTAGE_DEFAULT = "0"

REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []  # noqa: F405
REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}  # noqa: F405

LOGGING["root"]["level"] = "WARNING"  # noqa: F405
LOGGING["loggers"]["crm"]["handlers"] = ["console"]  # noqa: F405
LOGGING["loggers"]["crm"]["level"] = "WARNING"  # noqa: F405
