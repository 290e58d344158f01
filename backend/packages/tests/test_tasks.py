"""
Celery task and management command tests for availability warming.
"""
import pytest
from io import StringIO
from django.core.management import call_command
from django.core.management.base import CommandError
from unittest.mock import patch

from packages.services import get_availability_service
from packages.tasks import warm_package_availability_cache


@pytest.fixture
def catalogue(make_product, make_package):
    beer = make_product("Beer", stock=30)
    ice = make_product("Ice", stock=0)
    wine = make_product("Wine", stock=200)
    make_package("Beer Bucket", [(beer, 6)])
    make_package("Ice Bucket", [(beer, 6), (ice, 1)])
    make_package("Wine Night", [(wine, 2)])
    old = make_package("Old Promo", [(wine, 1)])
    old.archive()


@pytest.mark.django_db
class TestWarmPackageAvailabilityTask:

    def test_warms_every_active_package(self, catalogue):
        result = warm_package_availability_cache()

        assert result["status"] == "completed"
        assert result["packages"] == 3
        assert result["counts"] == {"available": 1, "low_stock": 1, "out_of_stock": 1}
        assert get_availability_service().get_cache_stats()["size"] == 3

    def test_include_inactive(self, catalogue):
        result = warm_package_availability_cache(include_inactive=True)

        assert result["packages"] == 4

    def test_runs_as_a_celery_task(self, catalogue):
        async_result = warm_package_availability_cache.apply(kwargs={"include_inactive": True})

        assert async_result.successful()
        assert async_result.get()["packages"] == 4

    def test_failure_is_reported(self, catalogue):
        service = get_availability_service()
        with patch.object(service, "calculate_all_package_availability", side_effect=RuntimeError("db gone")):
            result = warm_package_availability_cache()

        assert result == {"status": "failed", "error": "db gone"}


@pytest.mark.django_db
class TestWarmPackageAvailabilityCommand:

    def test_command_reports_counts(self, catalogue):
        out = StringIO()

        call_command("warm_package_availability", "--show-stats", stdout=out)

        output = out.getvalue()
        assert "Computed availability for 3 packages" in output
        assert "Out of stock: 1" in output
        assert "Entries: 3" in output

    def test_command_include_inactive(self, catalogue):
        out = StringIO()

        call_command("warm_package_availability", "--include-inactive", stdout=out)

        assert "Computed availability for 4 packages" in out.getvalue()

    def test_command_fails_loudly(self, catalogue):
        service = get_availability_service()
        with patch.object(service, "calculate_all_package_availability", side_effect=RuntimeError("db gone")):
            with pytest.raises(CommandError):
                call_command("warm_package_availability", stdout=StringIO())
