"""Core middleware."""
from django.conf import settings
from django.utils.cache import patch_cache_control


class NoStoreAPIMiddleware:
    """Mark API responses as uncacheable.

    Billing reports are computed from the data as it is at request time,
    so a cached commission or invoice figure would silently go stale.
    Applies to every path under ``NO_STORE_PATH_PREFIXES``.
    """

    def __init__(self, get_response):
        self.get_response = get_response
        self.prefixes = tuple(getattr(settings, "NO_STORE_PATH_PREFIXES", ("/api/",)))

    def __call__(self, request):
        response = self.get_response(request)
        if not request.path.startswith(self.prefixes):
            return response

        patch_cache_control(response, private=True, no_store=True, max_age=0)
        response["Pragma"] = "no-cache"
        return response
