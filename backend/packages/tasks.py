from celery import shared_task
import logging

from .services import AvailabilityStatus, get_availability_service

logger = logging.getLogger(__name__)


@shared_task
def warm_package_availability_cache(include_inactive=False):
    """
    Recompute availability for every package and refill the cache.

    Runs against the availability service of the process executing it, so it
    warms the web process cache when run eagerly or from a management
    command in that process. The returned counts double as a stock report.

    Returns:
        dict: Status and per-status package counts
    """
    try:
        service = get_availability_service()
        results = service.calculate_all_package_availability(
            include_inactive=include_inactive, force_refresh=True
        )

        counts = {choice.value: 0 for choice in AvailabilityStatus}
        for result in results.values():
            counts[service.classify_status(result.max_sellable)] += 1

        logger.info(
            f"Warmed availability for {len(results)} packages: "
            f"{counts[AvailabilityStatus.OUT_OF_STOCK]} out of stock, "
            f"{counts[AvailabilityStatus.LOW_STOCK]} low stock"
        )
        return {
            "status": "completed",
            "packages": len(results),
            "counts": counts,
            "cache_version": service.get_cache_stats()["version"],
        }
    except Exception as exc:
        logger.error(f"Error warming package availability cache: {exc}")
        return {"status": "failed", "error": str(exc)}
