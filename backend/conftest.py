"""
Root conftest.py for all backend tests.

This file makes fixtures available to all test files across all apps.
"""
import itertools
import pytest
from decimal import Decimal

from packages.services import reset_availability_service


# ============================================================================
# AUTO-USE FIXTURES (Run automatically for every test)
# ============================================================================

@pytest.fixture(autouse=True, scope="session")
def celery_in_memory():
    """
    Run Celery tasks inline with in-memory broker and results.

    Tests never need a Redis server; ``.delay()`` executes the task in
    the test process and returns an EagerResult.
    """
    from core_backend.celery import app

    app.conf.update(
        task_always_eager=True,
        task_eager_propagates=True,
        broker_url="memory://",
        result_backend="cache+memory://",
    )
    yield


@pytest.fixture(autouse=True)
def fresh_availability_service():
    """
    Start every test with a new process-wide availability service.

    The availability cache lives in process memory, so without this a result
    cached by one test would be served to the next.
    """
    reset_availability_service()
    yield
    reset_availability_service()


# ============================================================================
# USER & API CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def api_client():
    """
    Provide DRF API client for API tests.

    Usage:
        def test_my_api(api_client):
            response = api_client.get('/api/health/')
            assert response.status_code == 200
    """
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def staff_user(db):
    """A regular register user (authenticated, not admin)."""
    from django.contrib.auth import get_user_model
    return get_user_model().objects.create_user(
        username="cashier", password="test-pass-123", is_staff=False
    )


@pytest.fixture
def manager_user(db):
    """An admin user allowed to adjust stock."""
    from django.contrib.auth import get_user_model
    return get_user_model().objects.create_user(
        username="manager", password="test-pass-123", is_staff=True
    )


def _jwt_client(user):
    from rest_framework.test import APIClient
    from rest_framework_simplejwt.tokens import RefreshToken

    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


@pytest.fixture
def authenticated_client(staff_user):
    """
    API client authenticated with a JWT access token.

    Usage:
        def test_protected_endpoint(authenticated_client):
            response = authenticated_client.get('/api/packages/availability/')
            assert response.status_code == 200
    """
    return _jwt_client(staff_user)


@pytest.fixture
def admin_api_client(manager_user):
    """API client authenticated as an admin (is_staff) user."""
    return _jwt_client(manager_user)


# ============================================================================
# CATALOGUE FIXTURES
# ============================================================================

_codes = itertools.count(1)


@pytest.fixture
def make_product(db):
    """
    Factory for products.

    Usage:
        beer = make_product("Beer A", stock=10)
    """
    from products.models import Product

    def _make_product(name="Product", stock=0, **kwargs):
        return Product.objects.create(
            name=name,
            current_stock=Decimal(str(stock)),
            **kwargs
        )

    return _make_product


@pytest.fixture
def make_package(db):
    """
    Factory for packages with their component lines.

    ``components`` is a list of (product, quantity) tuples, or dicts with
    PackageItem fields, in display order.

    Usage:
        bucket = make_package("Bucket of 6", [(beer_a, 6), (ice, 1)])
    """
    from packages.models import Package, PackageItem

    def _make_package(name="Package", components=(), **kwargs):
        kwargs.setdefault("package_code", f"PKG-{next(_codes):04d}")
        kwargs.setdefault("base_price", Decimal("100.00"))
        package = Package.objects.create(name=name, **kwargs)
        for order, component in enumerate(components):
            if isinstance(component, dict):
                fields = {"display_order": order, **component}
            else:
                product, quantity = component
                fields = {"product": product, "quantity": quantity, "display_order": order}
            PackageItem.objects.create(package=package, **fields)
        return package

    return _make_package
