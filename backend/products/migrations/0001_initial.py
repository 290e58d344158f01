import decimal
import uuid

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "is_active",
                    models.BooleanField(
                        db_index=True,
                        default=True,
                        help_text="Designates whether this record is active. Inactive records are considered archived.",
                    ),
                ),
                (
                    "archived_at",
                    models.DateTimeField(
                        blank=True, help_text="Timestamp when this record was archived.", null=True
                    ),
                ),
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("name", models.CharField(help_text="Name of the product.", max_length=200)),
                (
                    "sku",
                    models.CharField(
                        blank=True,
                        help_text="Stock keeping unit code.",
                        max_length=50,
                        null=True,
                        unique=True,
                    ),
                ),
                (
                    "description",
                    models.TextField(blank=True, help_text="Detailed description of the product."),
                ),
                (
                    "unit_of_measure",
                    models.CharField(
                        default="piece",
                        help_text="Unit the stock is counted in, e.g. 'piece', 'bottle', 'liter'.",
                        max_length=20,
                    ),
                ),
                (
                    "base_price",
                    models.DecimalField(
                        decimal_places=2,
                        default=decimal.Decimal("0.00"),
                        help_text="The regular selling price of the product.",
                        max_digits=10,
                    ),
                ),
                (
                    "current_stock",
                    models.DecimalField(
                        decimal_places=2,
                        default=decimal.Decimal("0.00"),
                        help_text="Quantity on hand. May be fractional for liquids sold by volume.",
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0.00"))],
                    ),
                ),
                (
                    "reorder_point",
                    models.DecimalField(
                        decimal_places=2,
                        default=decimal.Decimal("0.00"),
                        help_text="Stock level at or below which the product should be reordered.",
                        max_digits=12,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Product",
                "verbose_name_plural": "Products",
                "ordering": ["name"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["is_active", "current_stock"], name="product_active_stock_idx"),
                    models.Index(fields=["name"], name="product_name_idx"),
                ],
            },
        ),
    ]
