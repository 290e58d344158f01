"""
ProductStockStore Tests

Integration tests for the ORM-backed stock store and for the availability
service running on top of it.
"""
import uuid
import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone

from packages.models import Package, PackageItem
from packages.services import PackageAvailabilityService, ProductStockStore


@pytest.mark.django_db
class TestProductStockStore:

    def test_get_package(self, make_package):
        package = make_package("Bucket of 6", package_type=Package.PackageType.PROMOTIONAL)

        record = ProductStockStore().get_package(package.id)

        assert record.id == str(package.id)
        assert record.name == "Bucket of 6"
        assert record.package_type == "promotional"
        assert record.is_active is True

    def test_get_package_finds_archived_packages(self, make_package):
        package = make_package("Old Promo")
        package.archive()

        assert ProductStockStore().get_package(package.id).is_active is False

    @pytest.mark.parametrize("package_id", [uuid.uuid4(), "not-a-uuid"])
    def test_get_package_unknown_returns_none(self, package_id):
        assert ProductStockStore().get_package(package_id) is None

    def test_components_in_display_order(self, make_product, make_package):
        beer = make_product("Beer", stock=60)
        ice = make_product("Ice", stock=5)
        lime = make_product("Lime", stock=10)
        package = make_package(
            "Bucket",
            [
                {"product": ice, "quantity": 1, "display_order": 2},
                {"product": beer, "quantity": 6, "display_order": 1},
                {"product": lime, "quantity": 2, "display_order": 2, "is_choice_item": True,
                 "choice_group": "garnish"},
            ],
        )

        lines = ProductStockStore().get_package_components(package.id)

        assert [line.product_name for line in lines] == ["Beer", "Ice", "Lime"]
        assert lines[0].required_quantity == 6
        assert lines[2].is_choice_item is True
        assert lines[2].choice_group == "garnish"

    def test_get_product_stock(self, make_product):
        beer = make_product("Beer", stock="12.50")
        store = ProductStockStore()

        assert store.get_product_stock(beer.id) == Decimal("12.50")
        assert store.get_product_stock(uuid.uuid4()) is None

    def test_get_product(self, make_product):
        beer = make_product("Beer", stock=7)

        record = ProductStockStore().get_product(str(beer.id))

        assert record.name == "Beer"
        assert record.current_stock == Decimal("7")
        assert ProductStockStore().get_product("not-a-uuid") is None

    def test_active_packages_respect_archive_and_validity_window(self, make_package):
        today = timezone.localdate()
        current = make_package("Current")
        windowed = make_package(
            "Windowed", valid_from=today - timedelta(days=1), valid_until=today + timedelta(days=1)
        )
        expired = make_package("Expired", valid_until=today - timedelta(days=1))
        upcoming = make_package("Upcoming", valid_from=today + timedelta(days=1))
        archived = make_package("Archived")
        archived.archive()

        store = ProductStockStore()
        active = [record.id for record in store.get_active_packages()]
        everything = [record.id for record in store.get_active_packages(include_inactive=True)]

        assert active == [str(current.id), str(windowed.id)]
        assert set(everything) == {
            str(p.id) for p in (current, windowed, expired, upcoming, archived)
        }

    def test_packages_using_product(self, make_product, make_package):
        beer = make_product("Beer", stock=60)
        wine = make_product("Wine", stock=10)
        bucket = make_package("Bucket", [(beer, 6)])
        make_package("Wine Night", [(wine, 2)])
        old = make_package("Old Promo", [(beer, 1)])
        old.archive()

        store = ProductStockStore()
        active_usages = store.get_packages_using_product(beer.id)
        all_usages = store.get_packages_using_product(beer.id, include_inactive=True)

        assert [(package.id, line.required_quantity) for package, line in active_usages] == [
            (str(bucket.id), 6)
        ]
        assert len(all_usages) == 2

    def test_adjust_stock_delegates_to_inventory_service(self, make_product):
        beer = make_product("Beer", stock=10)

        result = ProductStockStore().adjust_stock(beer.id, Decimal("-4"), reason="spillage")

        assert result["success"] is True
        assert result["quantity_after"] == Decimal("6")


@pytest.mark.django_db
class TestAvailabilityAgainstDatabase:

    def test_bucket_of_six(self, make_product, make_package):
        beer = make_product("Beer A", stock=20)
        ice = make_product("Ice", stock=3)
        bucket = make_package("Bucket of 6", [(beer, 6), (ice, 1)])
        service = PackageAvailabilityService(store=ProductStockStore(), low_stock_threshold=20)

        result = service.calculate_package_availability(bucket.id)

        assert result.max_sellable == 3
        assert result.bottleneck_product.product_id == str(beer.id)

        ice.current_stock = Decimal("0")
        ice.save()
        result = service.calculate_package_availability(bucket.id, force_refresh=True)

        assert result.max_sellable == 0
        assert result.bottleneck_product.product_name == "Ice"

    def test_legacy_zero_quantity_row(self, make_product, make_package):
        beer = make_product("Beer", stock=20)
        package = make_package("Legacy", [(beer, 6)])
        PackageItem.objects.filter(package=package).update(quantity=0)
        service = PackageAvailabilityService(store=ProductStockStore(), low_stock_threshold=20)

        result = service.calculate_package_availability(package.id)

        assert result.max_sellable == 0
        assert result.component_availability[0].max_packages is None


@pytest.mark.django_db
class TestCatalogueModels:

    def test_package_validity_window(self, make_package):
        today = timezone.localdate()
        package = make_package(
            "Summer Promo", valid_from=today, valid_until=today + timedelta(days=30)
        )

        assert package.is_currently_valid()
        assert package.is_currently_valid(today + timedelta(days=30))
        assert not package.is_currently_valid(today - timedelta(days=1))
        assert not package.is_currently_valid(today + timedelta(days=31))

    def test_package_delete_archives(self, make_package):
        package = make_package("Promo")

        package.delete()

        assert not Package.objects.filter(pk=package.pk).exists()
        assert Package.all_objects.get(pk=package.pk).is_active is False

    def test_product_low_stock(self, make_product):
        product = make_product("Lime", stock=3, reorder_point=Decimal("5"))

        assert product.is_low_stock

    def test_unarchive_restores_package(self, make_package):
        package = make_package("Promo")
        package.archive()

        package.unarchive()

        restored = Package.objects.get(pk=package.pk)
        assert restored.archived_at is None
