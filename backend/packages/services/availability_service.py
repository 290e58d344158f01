"""
Package availability service.

Calculates how many units of a package can be sold from the current stock of
its component products.

Algorithm:
1. Load the package's component lines (product + required quantity per package)
2. Read the current stock of each distinct component product
3. For each component: max_packages = floor(stock / required)
4. max_sellable = minimum over the components; the first component (in
   display order) reaching the minimum is the bottleneck

Results are advisory. The authoritative oversell guard is the row-locked
adjustment in ``InventoryService``; a stale reading here can only lead to an
order that is then rejected at confirmation time.
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
import logging

from django.core.cache import caches
from django.db import models
from django.utils import timezone

from packages.conf import get_availability_setting
from packages.exceptions import (
    AvailabilityCalculationError,
    InvalidComponentDefinition,
    PackageAvailabilityError,
    PackageNotFound,
    ProductNotFound,
)
from packages.services.cache import AVAILABILITY_CACHE_ALIAS, AvailabilityCache
from packages.services.store import ComponentLine, PackageRecord, ProductStockStore

logger = logging.getLogger(__name__)


class AvailabilityStatus(models.TextChoices):
    AVAILABLE = "available", "Available"
    LOW_STOCK = "low_stock", "Low Stock"
    OUT_OF_STOCK = "out_of_stock", "Out of Stock"


class AvailabilityFormat(models.TextChoices):
    """Projection used by the list endpoint."""
    SUMMARY = "summary", "Summary"
    FULL = "full", "Full breakdown"


@dataclass(frozen=True)
class ComponentAvailability:
    """How many packages one component alone could support."""
    product_id: str
    product_name: str
    current_stock: Decimal
    required_per_package: Optional[int]
    max_packages: Optional[int]  # None when the line has an invalid quantity
    is_choice_item: bool = False
    choice_group: Optional[str] = None


@dataclass(frozen=True)
class BottleneckProduct:
    product_id: str
    product_name: str
    current_stock: Decimal
    required_per_package: int


@dataclass(frozen=True)
class PackageAvailabilityResult:
    package_id: str
    package_name: str
    max_sellable: int
    bottleneck_product: Optional[BottleneckProduct] = None
    component_availability: Tuple[ComponentAvailability, ...] = ()
    calculated_at: Optional[datetime] = None


@dataclass(frozen=True)
class BottleneckSummary:
    product_name: str
    current_stock: Decimal


@dataclass(frozen=True)
class PackageAvailabilitySummary:
    package_id: str
    package_name: str
    max_sellable: int
    status: str
    bottleneck: Optional[BottleneckSummary] = None


@dataclass(frozen=True)
class PackageImpactInfo:
    package_id: str
    package_name: str
    quantity_per_package: int
    max_sellable: int
    package_type: str


@dataclass(frozen=True)
class ProductPackageImpact:
    product_id: str
    product_name: str
    current_stock: Decimal
    affected_packages: Tuple[PackageImpactInfo, ...]
    total_packages_impacted: int
    minimum_package_availability: Optional[int] = None


def _as_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def max_packages_for(current_stock, required_per_package: int) -> int:
    """floor(current_stock / required_per_package), never below zero."""
    stock = _as_decimal(current_stock)
    if stock <= 0:
        return 0
    return int(stock // Decimal(required_per_package))


class PackageAvailabilityService:
    """
    Computes package availability over a stock store, caching results.

    The store and the cache are injected; production code shares one
    instance per process through ``get_availability_service()``.
    """

    def __init__(self, store=None, cache=None, low_stock_threshold=None):
        self.store = store if store is not None else ProductStockStore()
        self.cache = cache if cache is not None else AvailabilityCache()
        if low_stock_threshold is None:
            low_stock_threshold = get_availability_setting("LOW_STOCK_THRESHOLD")
        self.low_stock_threshold = int(low_stock_threshold)

    # ------------------------------------------------------------------
    # Single package
    # ------------------------------------------------------------------

    def calculate_package_availability(
        self, package_id, force_refresh: bool = False
    ) -> PackageAvailabilityResult:
        """
        Availability of one package with its component breakdown.

        Raises:
            PackageNotFound: the id does not resolve to a package.
            AvailabilityCalculationError: the stock store failed.
        """
        result, _ = self.get_package_availability(package_id, force_refresh)
        return result

    def get_package_availability(
        self, package_id, force_refresh: bool = False
    ) -> Tuple[PackageAvailabilityResult, bool]:
        """Like ``calculate_package_availability`` but also reports whether the cache answered."""
        if not force_refresh:
            cached = self.cache.get(package_id)
            if cached is not None:
                logger.info(f"Cache hit for package {package_id}")
                return cached, True

        # Read before touching the store so a concurrent version bump marks
        # this result stale.
        version = self.cache.version

        try:
            result = self._calculate(package_id)
        except PackageAvailabilityError:
            raise
        except Exception as e:
            logger.error(f"Error calculating availability for package {package_id}: {e}")
            raise AvailabilityCalculationError(
                f"Failed to calculate availability for package {package_id}"
            ) from e

        self.cache.set(package_id, result, version=version)

        bottleneck_name = (
            result.bottleneck_product.product_name if result.bottleneck_product else "none"
        )
        logger.info(
            f"Package {result.package_name}: max_sellable={result.max_sellable}, "
            f"bottleneck={bottleneck_name}"
        )
        return result, False

    def _calculate(self, package_id) -> PackageAvailabilityResult:
        package = self.store.get_package(package_id)
        if package is None:
            raise PackageNotFound(package_id)

        lines = self.store.get_package_components(package.id)
        if not lines:
            logger.warning(
                f"Package {package.name} ({package.id}) has no components; reporting 0 available"
            )
            return PackageAvailabilityResult(
                package_id=package.id,
                package_name=package.name,
                max_sellable=0,
                calculated_at=timezone.now(),
            )

        stock_levels = self._load_stock_levels(lines)
        components = tuple(
            self._component_availability(package, line, stock_levels[line.product_id])
            for line in lines
        )
        bottleneck = self._identify_bottleneck(components)

        return PackageAvailabilityResult(
            package_id=package.id,
            package_name=package.name,
            max_sellable=bottleneck.max_packages if bottleneck else 0,
            bottleneck_product=(
                BottleneckProduct(
                    product_id=bottleneck.product_id,
                    product_name=bottleneck.product_name,
                    current_stock=bottleneck.current_stock,
                    required_per_package=bottleneck.required_per_package,
                )
                if bottleneck
                else None
            ),
            component_availability=components,
            calculated_at=timezone.now(),
        )

    def _load_stock_levels(self, lines: List[ComponentLine]) -> Dict[str, Decimal]:
        """One stock read per distinct product; a missing product counts as no stock."""
        stock_levels = {}
        for line in lines:
            if line.product_id in stock_levels:
                continue
            stock = self.store.get_product_stock(line.product_id)
            if stock is None:
                logger.warning(
                    f"Component product {line.product_id} ({line.product_name}) not found; "
                    f"treating stock as 0"
                )
            stock_levels[line.product_id] = _as_decimal(stock)
        return stock_levels

    def _component_availability(
        self, package: PackageRecord, line: ComponentLine, current_stock: Decimal
    ) -> ComponentAvailability:
        required = line.required_quantity
        if required is None or required <= 0:
            error = InvalidComponentDefinition(package.id, line.product_id, required)
            logger.warning(f"{error.message}; component skipped")
            max_packages = None
        else:
            max_packages = max_packages_for(current_stock, required)

        return ComponentAvailability(
            product_id=line.product_id,
            product_name=line.product_name,
            current_stock=current_stock,
            required_per_package=required,
            max_packages=max_packages,
            is_choice_item=line.is_choice_item,
            choice_group=line.choice_group,
        )

    @staticmethod
    def _identify_bottleneck(components) -> Optional[ComponentAvailability]:
        """
        The component with the lowest max_packages.

        Ties go to the earliest component in display order. Choice-group
        items are treated as required like any other component.
        """
        bottleneck = None
        for component in components:
            if component.max_packages is None:
                continue
            if bottleneck is None or component.max_packages < bottleneck.max_packages:
                bottleneck = component
        return bottleneck

    # ------------------------------------------------------------------
    # All packages
    # ------------------------------------------------------------------

    def _load_packages(self, include_inactive: bool) -> List[PackageRecord]:
        try:
            return self.store.get_active_packages(include_inactive)
        except Exception as e:
            logger.error(f"Error loading packages: {e}")
            raise AvailabilityCalculationError("Failed to load packages") from e

    @staticmethod
    def _fallback_result(package: PackageRecord) -> PackageAvailabilityResult:
        return PackageAvailabilityResult(
            package_id=package.id,
            package_name=package.name,
            max_sellable=0,
            calculated_at=timezone.now(),
        )

    def calculate_all_package_availability(
        self, include_inactive: bool = False, force_refresh: bool = False
    ) -> Dict[str, PackageAvailabilityResult]:
        """
        Availability for every (active) package, keyed by package id.

        A package whose calculation fails is reported with zero availability
        instead of failing the batch.
        """
        packages = self._load_packages(include_inactive)
        results = {}

        for package in packages:
            try:
                results[package.id] = self.calculate_package_availability(
                    package.id, force_refresh
                )
            except Exception as e:
                logger.error(f"Error calculating availability for package {package.id}: {e}")
                results[package.id] = self._fallback_result(package)

        logger.info(f"Calculated availability for {len(results)} packages")
        return results

    def classify_status(self, max_sellable: int) -> str:
        if max_sellable <= 0:
            return AvailabilityStatus.OUT_OF_STOCK
        if max_sellable <= self.low_stock_threshold:
            return AvailabilityStatus.LOW_STOCK
        return AvailabilityStatus.AVAILABLE

    def summarize(self, result: PackageAvailabilityResult) -> PackageAvailabilitySummary:
        bottleneck = None
        if result.bottleneck_product:
            bottleneck = BottleneckSummary(
                product_name=result.bottleneck_product.product_name,
                current_stock=result.bottleneck_product.current_stock,
            )
        return PackageAvailabilitySummary(
            package_id=result.package_id,
            package_name=result.package_name,
            max_sellable=result.max_sellable,
            status=self.classify_status(result.max_sellable),
            bottleneck=bottleneck,
        )

    def get_all_package_summaries(
        self, include_inactive: bool = False, force_refresh: bool = False
    ) -> List[PackageAvailabilitySummary]:
        """Compact availability rows for list views (no component breakdown)."""
        results = self.calculate_all_package_availability(
            include_inactive=include_inactive, force_refresh=force_refresh
        )
        return [self.summarize(result) for result in results.values()]

    # ------------------------------------------------------------------
    # Product impact
    # ------------------------------------------------------------------

    def get_product_package_impact(self, product_id) -> ProductPackageImpact:
        """Which active packages use a product, and how available each one is."""
        try:
            product = self.store.get_product(product_id)
            usages = None if product is None else self.store.get_packages_using_product(product.id)
        except Exception as e:
            logger.error(f"Error loading package usage for product {product_id}: {e}")
            raise AvailabilityCalculationError(
                f"Failed to get package impact for product {product_id}"
            ) from e

        if product is None:
            raise ProductNotFound(product_id)

        # A product may appear on more than one line of the same package
        quantities: Dict[str, int] = {}
        packages: Dict[str, PackageRecord] = {}
        for package, line in usages:
            packages.setdefault(package.id, package)
            quantities[package.id] = quantities.get(package.id, 0) + (line.required_quantity or 0)

        affected = []
        for package_id, package in packages.items():
            try:
                availability = self.calculate_package_availability(package_id)
            except Exception as e:
                logger.error(f"Error calculating availability for package {package_id}: {e}")
                continue
            affected.append(
                PackageImpactInfo(
                    package_id=package_id,
                    package_name=package.name,
                    quantity_per_package=quantities[package_id],
                    max_sellable=availability.max_sellable,
                    package_type=package.package_type,
                )
            )

        minimum = min((info.max_sellable for info in affected), default=None)
        logger.info(
            f"Product {product.name} impacts {len(affected)} packages, "
            f"min availability: {minimum if minimum is not None else 'N/A'}"
        )
        return ProductPackageImpact(
            product_id=product.id,
            product_name=product.name,
            current_stock=product.current_stock,
            affected_packages=tuple(affected),
            total_packages_impacted=len(affected),
            minimum_package_availability=minimum,
        )

    # ------------------------------------------------------------------
    # Cache management
    # ------------------------------------------------------------------

    def invalidate_cache(self, package_id=None):
        """Drop one package's entry, or every entry when no id is given."""
        self.cache.invalidate(package_id)

    def invalidate_cache_for_product(self, product_id) -> int:
        """Drop entries of every package (active or not) that uses the product."""
        usages = self.store.get_packages_using_product(product_id, include_inactive=True)
        removed = self.cache.invalidate_many({package.id for package, _ in usages})
        logger.info(f"Invalidated {removed} cached packages using product {product_id}")
        return removed

    def notify_stock_changed(self, reason: str = "") -> int:
        """Stock moved somewhere: every cached result is now stale."""
        return self.cache.bump_version(reason)

    def get_cache_stats(self) -> Dict:
        return self.cache.stats()


_availability_service: Optional[PackageAvailabilityService] = None


def get_availability_service() -> PackageAvailabilityService:
    """The process-wide service (and therefore cache) shared by views, signals and tasks."""
    global _availability_service
    if _availability_service is None:
        _availability_service = PackageAvailabilityService(
            store=ProductStockStore(),
            cache=AvailabilityCache(backend=caches[AVAILABILITY_CACHE_ALIAS]),
        )
    return _availability_service


def reset_availability_service(service: Optional[PackageAvailabilityService] = None):
    """Replace the process-wide service; with no argument a fresh one is built on next use."""
    global _availability_service
    _availability_service = service
