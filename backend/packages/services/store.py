"""
Product stock store: the read side the availability engine depends on.

The engine only needs the handful of queries below, so it talks to this
class rather than to the ORM directly; tests substitute an in-memory store
with the same methods.
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple
import logging

from django.core.exceptions import ValidationError
from django.db.models import Q
from django.utils import timezone

from packages.models import Package, PackageItem
from products.models import Product

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageRecord:
    id: str
    name: str
    package_type: str
    is_active: bool
    valid_from: Optional[date] = None
    valid_until: Optional[date] = None


@dataclass(frozen=True)
class ComponentLine:
    product_id: str
    product_name: str
    required_quantity: Optional[int]
    is_choice_item: bool = False
    choice_group: Optional[str] = None


@dataclass(frozen=True)
class ProductRecord:
    id: str
    name: str
    current_stock: Decimal


def _package_record(package: Package) -> PackageRecord:
    return PackageRecord(
        id=str(package.id),
        name=package.name,
        package_type=package.package_type,
        is_active=package.is_active,
        valid_from=package.valid_from,
        valid_until=package.valid_until,
    )


def _component_line(item: PackageItem) -> ComponentLine:
    return ComponentLine(
        product_id=str(item.product_id),
        product_name=item.product.name,
        required_quantity=item.quantity,
        is_choice_item=item.is_choice_item,
        choice_group=item.choice_group,
    )


class ProductStockStore:
    """ORM-backed implementation of the stock store."""

    @staticmethod
    def _active_window(today=None):
        today = today or timezone.localdate()
        return (
            Q(is_active=True)
            & (Q(valid_from__isnull=True) | Q(valid_from__lte=today))
            & (Q(valid_until__isnull=True) | Q(valid_until__gte=today))
        )

    def get_package(self, package_id) -> Optional[PackageRecord]:
        """Return the package, active or archived, or None if the id does not resolve."""
        try:
            package = Package.all_objects.get(pk=package_id)
        except (Package.DoesNotExist, ValidationError, ValueError):
            return None
        return _package_record(package)

    def get_package_components(self, package_id) -> List[ComponentLine]:
        """Component lines in display order."""
        items = (
            PackageItem.objects.filter(package_id=package_id)
            .select_related("product")
            .order_by("display_order", "id")
        )
        return [_component_line(item) for item in items]

    def get_product(self, product_id) -> Optional[ProductRecord]:
        try:
            product = Product.all_objects.only("id", "name", "current_stock").get(pk=product_id)
        except (Product.DoesNotExist, ValidationError, ValueError):
            return None
        return ProductRecord(
            id=str(product.id), name=product.name, current_stock=product.current_stock
        )

    def get_product_stock(self, product_id) -> Optional[Decimal]:
        """Current stock of a product, or None if the product does not exist."""
        stock = (
            Product.all_objects.filter(pk=product_id)
            .values_list("current_stock", flat=True)
            .first()
        )
        return stock

    def get_active_packages(self, include_inactive: bool = False) -> List[PackageRecord]:
        """
        Packages that can be sold today, ordered by name.

        With ``include_inactive`` every package is returned, including
        archived ones and those outside their validity window.
        """
        if include_inactive:
            queryset = Package.all_objects.all()
        else:
            queryset = Package.all_objects.filter(self._active_window())
        return [_package_record(package) for package in queryset.order_by("name", "id")]

    def get_packages_using_product(
        self, product_id, include_inactive: bool = False
    ) -> List[Tuple[PackageRecord, ComponentLine]]:
        """Every (package, component line) pair where the product is a component."""
        items = PackageItem.objects.filter(product_id=product_id).select_related(
            "package", "product"
        )
        if not include_inactive:
            today = timezone.localdate()
            items = items.filter(
                Q(package__is_active=True)
                & (Q(package__valid_from__isnull=True) | Q(package__valid_from__lte=today))
                & (Q(package__valid_until__isnull=True) | Q(package__valid_until__gte=today))
            )
        items = items.order_by("package__name", "package_id", "display_order", "id")
        return [(_package_record(item.package), _component_line(item)) for item in items]

    def adjust_stock(self, product_id, quantity_change, **kwargs):
        """
        Row-locked stock adjustment. Not used by the availability engine;
        exposed so callers holding a store handle can reach the atomic write.
        """
        from inventory.services import InventoryService

        return InventoryService.adjust_stock(product_id, quantity_change, **kwargs)
