from django.urls import path

from .views import PackageAvailabilityListView, PackageAvailabilityView

app_name = "packages"

urlpatterns = [
    # Bulk availability (summary or full breakdown)
    path("availability/", PackageAvailabilityListView.as_view(), name="availability-list"),
    path(
        "<str:package_id>/availability/",
        PackageAvailabilityView.as_view(),
        name="package-availability",
    ),
]
