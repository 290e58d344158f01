"""
Pytest fixtures for package availability tests.
"""
import pytest
from decimal import Decimal

from packages.services import (
    AvailabilityCache,
    ComponentLine,
    PackageAvailabilityService,
    PackageRecord,
    ProductRecord,
)


class FakeStockStore:
    """
    In-memory stand-in for ProductStockStore.

    Records how often stock and components are read so tests can tell a
    cache hit from a recomputation.
    """

    def __init__(self):
        self.packages = {}
        self.components = {}
        self.products = {}
        self.stock_reads = 0
        self.component_reads = 0
        self.failing_packages = set()
        self.fail_package_listing = False

    # -- setup helpers ------------------------------------------------------

    def add_product(self, product_id, name, stock):
        self.products[product_id] = ProductRecord(
            id=product_id, name=name, current_stock=Decimal(str(stock))
        )

    def set_stock(self, product_id, stock):
        product = self.products[product_id]
        self.products[product_id] = ProductRecord(
            id=product.id, name=product.name, current_stock=Decimal(str(stock))
        )

    def add_package(self, package_id, name, components, is_active=True,
                    package_type="regular", **kwargs):
        """``components`` is a list of (product_id, required_quantity) in display order."""
        self.packages[package_id] = PackageRecord(
            id=package_id,
            name=name,
            package_type=package_type,
            is_active=is_active,
            **kwargs
        )
        self.components[package_id] = [
            ComponentLine(
                product_id=product_id,
                product_name=self.products[product_id].name if product_id in self.products else product_id,
                required_quantity=quantity,
            )
            for product_id, quantity in components
        ]

    # -- store interface ----------------------------------------------------

    def get_package(self, package_id):
        return self.packages.get(str(package_id))

    def get_package_components(self, package_id):
        self.component_reads += 1
        if package_id in self.failing_packages:
            raise RuntimeError(f"storage failure reading package {package_id}")
        return list(self.components.get(package_id, []))

    def get_product(self, product_id):
        return self.products.get(str(product_id))

    def get_product_stock(self, product_id):
        self.stock_reads += 1
        product = self.products.get(product_id)
        return product.current_stock if product else None

    def get_active_packages(self, include_inactive=False):
        if self.fail_package_listing:
            raise RuntimeError("storage failure listing packages")
        packages = [
            package for package in self.packages.values()
            if include_inactive or package.is_active
        ]
        return sorted(packages, key=lambda package: (package.name, package.id))

    def get_packages_using_product(self, product_id, include_inactive=False):
        usages = []
        for package in self.get_active_packages(include_inactive):
            for line in self.components[package.id]:
                if line.product_id == product_id:
                    usages.append((package, line))
        return usages


@pytest.fixture
def store():
    return FakeStockStore()


@pytest.fixture
def availability_cache():
    return AvailabilityCache()


@pytest.fixture
def service(store, availability_cache):
    return PackageAvailabilityService(store=store, cache=availability_cache, low_stock_threshold=20)


@pytest.fixture
def bucket_store(store):
    """
    The "Bucket of 6" example: six of Beer A plus one bag of ice.
    Beer A = 20 (3 buckets), Ice = 3 (3 buckets): a tie.
    """
    store.add_product("beer-a", "Beer A", 20)
    store.add_product("ice", "Ice", 3)
    store.add_package("bucket", "Bucket of 6", [("beer-a", 6), ("ice", 1)])
    return store
