import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("products", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="StockHistoryEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "operation_type",
                    models.CharField(
                        choices=[
                            ("ADJUSTED_ADD", "Stock Added"),
                            ("ADJUSTED_SUBTRACT", "Stock Subtracted"),
                            ("ORDER_DEDUCTION", "Order Deduction"),
                        ],
                        help_text="Type of stock operation performed",
                        max_length=20,
                    ),
                ),
                (
                    "quantity_change",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Change in quantity (positive for additions, negative for subtractions)",
                        max_digits=12,
                    ),
                ),
                (
                    "previous_quantity",
                    models.DecimalField(decimal_places=2, help_text="Quantity before the operation", max_digits=12),
                ),
                (
                    "new_quantity",
                    models.DecimalField(decimal_places=2, help_text="Quantity after the operation", max_digits=12),
                ),
                (
                    "reason",
                    models.CharField(blank=True, help_text="Reason for the stock operation", max_length=255),
                ),
                (
                    "reference_id",
                    models.CharField(
                        blank=True,
                        help_text="Reference ID linking related operations (e.g. all lines of one package sale)",
                        max_length=100,
                    ),
                ),
                (
                    "timestamp",
                    models.DateTimeField(auto_now_add=True, help_text="When the operation was performed"),
                ),
                (
                    "product",
                    models.ForeignKey(
                        help_text="Product involved in the stock operation",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="stock_history",
                        to="products.product",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        help_text="User who performed the operation",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="stock_operations",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Stock History Entry",
                "verbose_name_plural": "Stock History Entries",
                "ordering": ["-timestamp"],
                "indexes": [
                    models.Index(fields=["product", "timestamp"], name="stock_hist_prod_time_idx"),
                    models.Index(fields=["operation_type"], name="stock_hist_operation_idx"),
                    models.Index(fields=["reference_id"], name="stock_hist_reference_idx"),
                ],
            },
        ),
    ]
