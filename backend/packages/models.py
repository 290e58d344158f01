import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core_backend.utils.archiving import SoftDeleteMixin
from products.models import Product


class Package(SoftDeleteMixin):
    """
    A bundle of products sold as a single line item (e.g. "Bucket of 6",
    a VIP table package).

    How many units can be sold right now is not stored anywhere; it is
    derived from component stock by ``PackageAvailabilityService``.
    """

    class PackageType(models.TextChoices):
        VIP_ONLY = "vip_only", _("VIP Only")
        REGULAR = "regular", _("Regular")
        PROMOTIONAL = "promotional", _("Promotional")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    package_code = models.CharField(
        max_length=50, unique=True, help_text=_("Short code used at the register.")
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    package_type = models.CharField(
        max_length=20, choices=PackageType.choices, default=PackageType.REGULAR
    )
    base_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    vip_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    valid_from = models.DateField(
        null=True, blank=True, help_text=_("First day the package can be sold.")
    )
    valid_until = models.DateField(
        null=True, blank=True, help_text=_("Last day the package can be sold.")
    )
    is_addon_eligible = models.BooleanField(
        default=False,
        help_text=_("Whether the package can be added on top of an existing order."),
    )
    products = models.ManyToManyField(
        Product, through="PackageItem", related_name="packages"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Package")
        verbose_name_plural = _("Packages")
        ordering = ["name"]
        indexes = [
            models.Index(fields=["is_active", "valid_from", "valid_until"], name="package_active_window_idx"),
        ]

    def __str__(self):
        return self.name

    def is_currently_valid(self, on_date=None):
        """Return True if ``on_date`` (default: today) falls inside the validity window."""
        on_date = on_date or timezone.localdate()
        if self.valid_from and on_date < self.valid_from:
            return False
        if self.valid_until and on_date > self.valid_until:
            return False
        return True


class PackageItem(models.Model):
    """
    One component line of a package: ``quantity`` units of ``product`` are
    consumed for every package sold.

    ``quantity`` is validated as a positive integer on input, but the column
    still admits 0/NULL so that legacy rows load; the availability engine
    skips such lines with a warning.
    """

    package = models.ForeignKey(Package, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(
        Product, on_delete=models.PROTECT, related_name="package_items"
    )
    quantity = models.PositiveIntegerField(
        null=True,
        validators=[MinValueValidator(1)],
        help_text=_("Units of the product required per package."),
    )
    is_choice_item = models.BooleanField(
        default=False,
        help_text=_("Part of a group of alternatives the customer chooses from."),
    )
    choice_group = models.CharField(max_length=50, blank=True, null=True)
    display_order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Package Item")
        verbose_name_plural = _("Package Items")
        ordering = ["display_order", "id"]
        indexes = [
            models.Index(fields=["package", "product"], name="package_item_pkg_prod_idx"),
            models.Index(fields=["product"], name="package_item_product_idx"),
        ]

    def __str__(self):
        return f"{self.quantity} x {self.product.name} in {self.package.name}"
