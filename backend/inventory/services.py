from django.core.exceptions import ValidationError
from django.db import transaction
from .exceptions import (
    InsufficientStockError,
    PackageNotSellable,
    StockPackageNotFound,
    StockProductNotFound,
)
from .models import StockHistoryEntry
from .signals import stock_changed
from products.models import Product
from decimal import Decimal, InvalidOperation
import logging

logger = logging.getLogger(__name__)


class InventoryService:

    @staticmethod
    def _to_decimal(value) -> Decimal:
        try:
            return Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            raise ValueError(f"Invalid quantity format: {value}")

    @staticmethod
    def _log_stock_operation(
        product: Product,
        operation_type: str,
        quantity_change: Decimal,
        previous_quantity: Decimal,
        new_quantity: Decimal,
        user=None,
        reason: str = "",
        reference_id: str = "",
    ):
        """
        Helper method to log stock operations to StockHistoryEntry.
        Runs inside the caller's transaction so history and stock commit together.
        """
        StockHistoryEntry.objects.create(
            product=product,
            user=user,
            operation_type=operation_type,
            quantity_change=quantity_change,
            previous_quantity=previous_quantity,
            new_quantity=new_quantity,
            reason=reason,
            reference_id=reference_id,
        )

    @staticmethod
    def _notify_on_commit(product_ids, reason="", reference_id=""):
        """Send stock_changed once the surrounding transaction commits."""
        product_ids = [str(product_id) for product_id in product_ids]

        def send():
            stock_changed.send(
                sender=InventoryService,
                product_ids=product_ids,
                reason=reason,
                reference_id=reference_id,
            )

        transaction.on_commit(send)

    @staticmethod
    def _lock_product(product_id) -> Product:
        try:
            return Product.all_objects.select_for_update().get(pk=product_id)
        except (Product.DoesNotExist, ValidationError, ValueError):
            raise StockProductNotFound(product_id)

    @staticmethod
    def _apply_change(product: Product, quantity_change: Decimal, operation_type=None,
                      user=None, reason="", reference_id=""):
        """
        Applies a change to an already locked product row.
        Raises InsufficientStockError if stock would go negative.
        """
        previous_quantity = product.current_stock
        new_quantity = previous_quantity + quantity_change
        if new_quantity < 0:
            raise InsufficientStockError(product.name, previous_quantity, quantity_change)

        # Queryset update: the stock_changed signal is the single change notification
        Product.all_objects.filter(pk=product.pk).update(current_stock=new_quantity)
        product.current_stock = new_quantity

        if operation_type is None:
            operation_type = 'ADJUSTED_ADD' if quantity_change >= 0 else 'ADJUSTED_SUBTRACT'

        InventoryService._log_stock_operation(
            product=product,
            operation_type=operation_type,
            quantity_change=quantity_change,
            previous_quantity=previous_quantity,
            new_quantity=new_quantity,
            user=user,
            reason=reason,
            reference_id=reference_id,
        )
        return previous_quantity, new_quantity

    @staticmethod
    def adjust_stock(product_id, quantity_change, reason="", reference_id="",
                     operation_type=None, user=None):
        """
        Atomically adjusts a product's stock by a signed quantity.

        The product row is locked for the duration of the transaction, so
        concurrent adjustments are serialized and stock never goes negative.

        Returns a result dict; failures are reported, not raised:
            {"success": True, "quantity_before", "quantity_after", "product_name"}
            {"success": False, "error": "..."}
        """
        try:
            change = InventoryService._to_decimal(quantity_change)
        except ValueError as e:
            return {"success": False, "error": str(e)}

        try:
            with transaction.atomic():
                product = InventoryService._lock_product(product_id)
                before, after = InventoryService._apply_change(
                    product,
                    change,
                    operation_type=operation_type,
                    user=user,
                    reason=reason,
                    reference_id=reference_id,
                )
                InventoryService._notify_on_commit([product.id], reason, reference_id)
        except (StockProductNotFound, InsufficientStockError) as e:
            logger.warning(f"Stock adjustment rejected for product {product_id}: {e}")
            return {"success": False, "error": str(e)}

        logger.info(
            f"Adjusted stock for {product.name}: {before} -> {after} "
            f"({change:+}) reason='{reason}'"
        )
        return {
            "success": True,
            "quantity_before": before,
            "quantity_after": after,
            "product_name": product.name,
        }

    @staticmethod
    @transaction.atomic
    def deduct_package_stock(package_id, quantity, reference_id="", user=None):
        """
        Deducts the component stock for selling ``quantity`` units of a package.

        Every component product is locked (in a stable order) before any
        write. If any component is short, the whole deduction is rolled back
        and InsufficientStockError propagates. Lines with a missing or
        non-positive quantity are skipped, matching the availability engine.

        Raises StockPackageNotFound for an unknown package and
        PackageNotSellable when no component line is valid, since the
        availability engine rates such a package at 0.

        Returns a list of per-product result dicts.
        """
        from packages.models import Package, PackageItem

        units = int(quantity)
        if units <= 0:
            raise ValueError("Package quantity must be a positive integer.")

        try:
            exists = Package.all_objects.filter(pk=package_id).exists()
        except (ValidationError, ValueError):
            exists = False
        if not exists:
            raise StockPackageNotFound(package_id)

        required = {}
        for item in PackageItem.objects.filter(package_id=package_id):
            if item.quantity is None or item.quantity <= 0:
                logger.warning(
                    f"Skipping invalid component {item.product_id} on package {package_id} "
                    f"(quantity={item.quantity})"
                )
                continue
            required[item.product_id] = required.get(item.product_id, 0) + item.quantity * units

        if not required:
            raise PackageNotSellable(package_id)

        # Lock in primary key order so concurrent deductions cannot deadlock
        products = {
            product.pk: product
            for product in Product.all_objects.select_for_update()
            .filter(pk__in=required.keys())
            .order_by('pk')
        }

        reason = f"Package sale x{units}"
        results = []
        for product_id in sorted(required, key=str):
            product = products.get(product_id)
            if product is None:
                raise StockProductNotFound(product_id)
            change = -Decimal(required[product_id])
            before, after = InventoryService._apply_change(
                product,
                change,
                operation_type='ORDER_DEDUCTION',
                user=user,
                reason=reason,
                reference_id=reference_id,
            )
            results.append({
                "product_id": str(product.id),
                "product_name": product.name,
                "quantity_before": before,
                "quantity_after": after,
            })

        InventoryService._notify_on_commit(products.keys(), reason, reference_id)
        logger.info(
            f"Deducted stock for {units} x package {package_id} "
            f"across {len(results)} products (ref={reference_id})"
        )
        return results
