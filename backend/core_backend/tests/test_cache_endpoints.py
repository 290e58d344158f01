"""
Availability cache monitoring endpoint tests (admin only).
"""
import pytest

from packages.services import get_availability_service


@pytest.fixture
def warmed(make_product, make_package):
    beer = make_product("Beer", stock=12)
    wine = make_product("Wine", stock=4)
    six = make_package("Six Pack", [(beer, 6)])
    flight = make_package("Wine Flight", [(wine, 2)])
    service = get_availability_service()
    service.calculate_package_availability(six.id)
    service.calculate_package_availability(flight.id)
    return six, flight, beer


@pytest.mark.django_db
class TestCacheStatistics:

    def test_returns_stats(self, admin_api_client, warmed):
        response = admin_api_client.get("/api/cache/stats/")

        assert response.status_code == 200
        assert response.json()["statistics"]["size"] == 2

    def test_admin_only(self, authenticated_client):
        assert authenticated_client.get("/api/cache/stats/").status_code == 403


@pytest.mark.django_db
class TestInvalidateCache:

    def test_invalidate_package(self, admin_api_client, warmed):
        six, flight, beer = warmed

        response = admin_api_client.post(
            "/api/cache/invalidate/", {"package_id": str(six.id)}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["statistics"]["size"] == 1

    def test_invalidate_by_product(self, admin_api_client, warmed):
        six, flight, beer = warmed

        response = admin_api_client.post(
            "/api/cache/invalidate/", {"product_id": str(beer.id)}, format="json"
        )

        assert response.status_code == 200
        assert "1 packages" in response.json()["message"]
        assert str(flight.id) in get_availability_service().cache

    def test_invalidate_everything_bumps_version(self, admin_api_client, warmed):
        version = get_availability_service().get_cache_stats()["version"]

        response = admin_api_client.post("/api/cache/invalidate/", {}, format="json")

        stats = response.json()["statistics"]
        assert stats["size"] == 0
        assert stats["version"] == version + 1

    def test_admin_only(self, authenticated_client):
        response = authenticated_client.post("/api/cache/invalidate/", {}, format="json")

        assert response.status_code == 403


class TestHealthCheck:

    def test_health_check_is_public(self, client):
        response = client.get("/api/health/")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
