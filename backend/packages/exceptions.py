"""
Custom exceptions for the package availability engine.

Each error carries the HTTP status and error code the API layer reports it
with, so views can translate any ``PackageAvailabilityError`` uniformly.
"""


class PackageAvailabilityError(Exception):
    """Base exception for package availability errors."""

    status_code = 500
    code = "AVAILABILITY_ERROR"

    def __init__(self, message=None):
        if message is None:
            message = "Failed to calculate package availability"
        self.message = message
        super().__init__(message)


class PackageNotFound(PackageAvailabilityError):
    """Raised when a package id does not resolve to a package."""

    status_code = 404
    code = "PACKAGE_NOT_FOUND"

    def __init__(self, package_id, message=None):
        self.package_id = package_id
        if message is None:
            message = f"Package not found: {package_id}"
        super().__init__(message)


class ProductNotFound(PackageAvailabilityError):
    """Raised when a product id does not resolve to a product."""

    status_code = 404
    code = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id, message=None):
        self.product_id = product_id
        if message is None:
            message = f"Product not found: {product_id}"
        super().__init__(message)


class InvalidComponentDefinition(PackageAvailabilityError):
    """
    A package component with a zero or missing required quantity.

    Never surfaced to callers: the engine logs it and leaves the component
    out of the limiting calculation.
    """

    status_code = 422
    code = "INVALID_COMPONENT_DEFINITION"

    def __init__(self, package_id, product_id, quantity, message=None):
        self.package_id = package_id
        self.product_id = product_id
        self.quantity = quantity
        if message is None:
            message = (
                f"Package {package_id} component {product_id} has invalid "
                f"required quantity {quantity!r}"
            )
        super().__init__(message)


class AvailabilityCalculationError(PackageAvailabilityError):
    """Raised when the stock store fails unexpectedly during a calculation."""

    status_code = 500
    code = "AVAILABILITY_CALCULATION_ERROR"
