"""
Package services.

- PackageAvailabilityService: max-sellable / bottleneck calculation
- AvailabilityCache: versioned in-process result cache
- ProductStockStore: ORM-backed reads the engine depends on
"""
from packages.services.cache import AvailabilityCache
from packages.services.store import ProductStockStore, PackageRecord, ComponentLine, ProductRecord
from packages.services.availability_service import (
    AvailabilityFormat,
    AvailabilityStatus,
    BottleneckProduct,
    BottleneckSummary,
    ComponentAvailability,
    PackageAvailabilityResult,
    PackageAvailabilityService,
    PackageAvailabilitySummary,
    PackageImpactInfo,
    ProductPackageImpact,
    get_availability_service,
    max_packages_for,
    reset_availability_service,
)

__all__ = [
    'AvailabilityCache',
    'ProductStockStore',
    'PackageRecord',
    'ComponentLine',
    'ProductRecord',
    'AvailabilityFormat',
    'AvailabilityStatus',
    'BottleneckProduct',
    'BottleneckSummary',
    'ComponentAvailability',
    'PackageAvailabilityResult',
    'PackageAvailabilityService',
    'PackageAvailabilitySummary',
    'PackageImpactInfo',
    'ProductPackageImpact',
    'get_availability_service',
    'max_packages_for',
    'reset_availability_service',
]
