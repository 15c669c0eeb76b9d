"""Production settings. Refuses to start on an unsafe configuration."""
from django.core.exceptions import ImproperlyConfigured

from .base import *  # noqa: F401,F403

DEBUG = False
ENABLE_DJANGO_ADMIN = env.bool("ENABLE_DJANGO_ADMIN", default=False)  # noqa: F405

SECURE_SSL_REDIRECT = env.bool("SECURE_SSL_REDIRECT", default=True)  # noqa: F405
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_HSTS_SECONDS = 60 * 60 * 24 * 365
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS", default=[])  # noqa: F405
if env.bool("BEHIND_TLS_PROXY", default=True):  # noqa: F405
    SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.ManifestStaticFilesStorage"},
}


def _configuration_errors():
    errors = []
    key = SECRET_KEY  # noqa: F405
    if len(key) < 50 or len(set(key)) < 5 or key.startswith("django-insecure-"):
        errors.append("SECRET_KEY är för svag för produktion.")
    if not SECURE_SSL_REDIRECT:
        errors.append("SECURE_SSL_REDIRECT måste vara aktiverad.")
    if not CORS_ALLOWED_ORIGINS:  # noqa: F405
        errors.append("CORS_ALLOWED_ORIGINS måste anges.")
    elif any("localhost" in o or "127.0.0.1" in o for o in CORS_ALLOWED_ORIGINS):  # noqa: F405
        errors.append("CORS_ALLOWED_ORIGINS får inte peka på localhost.")
    return errors


_errors = _configuration_errors()
if _errors:
    raise ImproperlyConfigured(" ".join(_errors))
