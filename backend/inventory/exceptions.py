"""
Custom exceptions for stock adjustments.
"""


class InventoryError(Exception):
    """Base exception for inventory errors."""
    pass


class InsufficientStockError(InventoryError):
    """Raised when an adjustment would take a product's stock below zero."""

    def __init__(self, product_name, current_stock, quantity_change, message=None):
        self.product_name = product_name
        self.current_stock = current_stock
        self.quantity_change = quantity_change
        if message is None:
            message = (
                f"Insufficient stock for {product_name}. Current: {current_stock}, "
                f"Requested change: {quantity_change}, "
                f"Would result in: {current_stock + quantity_change}"
            )
        super().__init__(message)


class StockProductNotFound(InventoryError):
    """Raised when the product to adjust does not exist."""

    def __init__(self, product_id, message=None):
        self.product_id = product_id
        if message is None:
            message = f"Product not found: {product_id}"
        super().__init__(message)


class StockPackageNotFound(InventoryError):
    """Raised when the package to deduct does not exist."""

    def __init__(self, package_id, message=None):
        self.package_id = package_id
        if message is None:
            message = f"Package not found: {package_id}"
        super().__init__(message)


class PackageNotSellable(InventoryError):
    """Raised when a package has no valid component lines to deduct."""

    def __init__(self, package_id, message=None):
        self.package_id = package_id
        if message is None:
            message = f"Package {package_id} has no valid components and cannot be sold"
        super().__init__(message)
