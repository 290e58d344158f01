"""
Keep the package availability cache consistent with stock and catalogue changes.

Stock adjustments announce themselves through ``inventory.signals.stock_changed``
(sent on commit). Direct edits to products, packages or package components
(admin, fixtures, archiving) are caught through post_save/post_delete.
Either way every cached result becomes stale.

The catalogue receivers wait for the writer's commit, so a reader cannot cache
the pre-commit rows under the new version.
"""
from django.db import transaction
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
from inventory.signals import stock_changed
from products.models import Product
from .conf import get_availability_setting
from .models import Package, PackageItem
from .services import get_availability_service
import logging

logger = logging.getLogger(__name__)


def _queue_cache_warming():
    if not get_availability_setting("WARM_ON_STOCK_CHANGE"):
        return
    from .tasks import warm_package_availability_cache

    try:
        warm_package_availability_cache.delay()
    except Exception as e:
        logger.error(f"Failed to queue package availability warming: {e}")


@receiver(stock_changed)
def handle_stock_changed(sender, product_ids=None, reason="", **kwargs):
    """Invalidate package availability after a committed stock adjustment."""
    try:
        version = get_availability_service().notify_stock_changed(
            reason or f"stock adjusted for {len(product_ids or [])} products"
        )
        logger.info(
            f"Package availability invalidated (version {version}) after stock change "
            f"for products {product_ids}"
        )
    except Exception as e:
        logger.error(f"Failed to invalidate package availability after stock change: {e}")
        return

    _queue_cache_warming()


def _invalidate_on_commit(reason, change):
    def invalidate():
        try:
            get_availability_service().notify_stock_changed(reason)
        except Exception as e:
            logger.error(f"Failed to invalidate package availability after {change} change: {e}")

    transaction.on_commit(invalidate)


@receiver([post_save, post_delete], sender=Product)
def handle_product_changes(sender, instance=None, **kwargs):
    """Stock or archive state edited directly on the product row."""
    _invalidate_on_commit(f"product {instance.pk} changed", "product")


@receiver([post_save, post_delete], sender=Package)
def handle_package_changes(sender, instance=None, **kwargs):
    """Package activated, archived or moved in or out of its validity window."""
    _invalidate_on_commit(f"package {instance.pk} changed", "package")


@receiver([post_save, post_delete], sender=PackageItem)
def handle_package_item_changes(sender, instance=None, **kwargs):
    """Component added, removed or its required quantity changed."""
    _invalidate_on_commit(f"components of package {instance.package_id} changed", "component")
