"""
URL configuration for core_backend project.
"""

from django.contrib import admin
from django.urls import path, include
from .views import health_check, cache_statistics, invalidate_cache


urlpatterns = [
    path("api/health/", health_check, name="health_check"),
    path("admin/", admin.site.urls),
    # Availability cache monitoring endpoints (admin only)
    path("api/cache/stats/", cache_statistics, name="cache_statistics"),
    path("api/cache/invalidate/", invalidate_cache, name="invalidate_cache"),
    path("api/packages/", include("packages.urls")),
    path("api/inventory/", include("inventory.urls")),
]
