from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _
from products.models import Product


class StockHistoryEntry(models.Model):
    """
    Tracks all stock operations for audit trail and history purposes.
    One row is written inside the same transaction as each adjustment.
    """

    OPERATION_CHOICES = [
        ('ADJUSTED_ADD', _('Stock Added')),
        ('ADJUSTED_SUBTRACT', _('Stock Subtracted')),
        ('ORDER_DEDUCTION', _('Order Deduction')),
    ]

    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="stock_history",
        help_text=_("Product involved in the stock operation")
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="stock_operations",
        help_text=_("User who performed the operation")
    )
    operation_type = models.CharField(
        max_length=20,
        choices=OPERATION_CHOICES,
        help_text=_("Type of stock operation performed")
    )
    quantity_change = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text=_("Change in quantity (positive for additions, negative for subtractions)")
    )
    previous_quantity = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text=_("Quantity before the operation")
    )
    new_quantity = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text=_("Quantity after the operation")
    )
    reason = models.CharField(
        max_length=255,
        blank=True,
        help_text=_("Reason for the stock operation")
    )
    reference_id = models.CharField(
        max_length=100,
        blank=True,
        help_text=_("Reference ID linking related operations (e.g. all lines of one package sale)")
    )
    timestamp = models.DateTimeField(
        auto_now_add=True,
        help_text=_("When the operation was performed")
    )

    class Meta:
        verbose_name = _("Stock History Entry")
        verbose_name_plural = _("Stock History Entries")
        ordering = ['-timestamp']
        indexes = [
            models.Index(fields=['product', 'timestamp'], name='stock_hist_prod_time_idx'),
            models.Index(fields=['operation_type'], name='stock_hist_operation_idx'),
            models.Index(fields=['reference_id'], name='stock_hist_reference_idx'),
        ]

    def __str__(self):
        return f"{self.operation_type}: {self.product.name} ({self.quantity_change:+.2f}) - {self.timestamp.strftime('%Y-%m-%d %H:%M')}"

    @property
    def operation_display(self):
        """Returns human-readable operation type."""
        return dict(self.OPERATION_CHOICES).get(self.operation_type, self.operation_type)
