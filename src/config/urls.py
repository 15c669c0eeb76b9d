"""URL configuration for the lead CRM."""
from django.conf import settings
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("api/v1/", include("api.urls")),
]

if settings.ENABLE_DJANGO_ADMIN:
    urlpatterns = [path("admin/", admin.site.urls)] + urlpatterns

if settings.DEBUG and "debug_toolbar" in settings.INSTALLED_APPS:
    urlpatterns += [path("__debug__/", include("debug_toolbar.urls"))]
