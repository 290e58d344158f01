import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from core_backend.utils.archiving import SoftDeleteMixin


class Product(SoftDeleteMixin):
    """
    A sellable or stocked item (a beer, a bottle of spirits, a bucket of ice).

    ``current_stock`` is the single source of truth for on-hand quantity and is
    only changed through ``InventoryService.adjust_stock`` so that every change
    is row-locked, audited and announced via ``inventory.signals.stock_changed``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200, help_text=_("Name of the product."))
    sku = models.CharField(
        max_length=50,
        unique=True,
        null=True,
        blank=True,
        help_text=_("Stock keeping unit code."),
    )
    description = models.TextField(
        blank=True, help_text=_("Detailed description of the product.")
    )
    unit_of_measure = models.CharField(
        max_length=20,
        default="piece",
        help_text=_("Unit the stock is counted in, e.g. 'piece', 'bottle', 'liter'."),
    )
    base_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("The regular selling price of the product."),
    )
    current_stock = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text=_("Quantity on hand. May be fractional for liquids sold by volume."),
    )
    reorder_point = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Stock level at or below which the product should be reordered."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Product")
        verbose_name_plural = _("Products")
        ordering = ["name"]
        indexes = [
            models.Index(fields=["is_active", "current_stock"], name="product_active_stock_idx"),
            models.Index(fields=["name"], name="product_name_idx"),
        ]

    def __str__(self):
        return self.name

    @property
    def is_low_stock(self):
        """Return True if stock is at or below the reorder point."""
        return self.current_stock <= self.reorder_point
