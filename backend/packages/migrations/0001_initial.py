import decimal
import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("products", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Package",
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
                (
                    "package_code",
                    models.CharField(
                        help_text="Short code used at the register.", max_length=50, unique=True
                    ),
                ),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                (
                    "package_type",
                    models.CharField(
                        choices=[
                            ("vip_only", "VIP Only"),
                            ("regular", "Regular"),
                            ("promotional", "Promotional"),
                        ],
                        default="regular",
                        max_length=20,
                    ),
                ),
                (
                    "base_price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0.00"))],
                    ),
                ),
                (
                    "vip_price",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        max_digits=10,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0.00"))],
                    ),
                ),
                (
                    "valid_from",
                    models.DateField(
                        blank=True, help_text="First day the package can be sold.", null=True
                    ),
                ),
                (
                    "valid_until",
                    models.DateField(
                        blank=True, help_text="Last day the package can be sold.", null=True
                    ),
                ),
                (
                    "is_addon_eligible",
                    models.BooleanField(
                        default=False,
                        help_text="Whether the package can be added on top of an existing order.",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Package",
                "verbose_name_plural": "Packages",
                "ordering": ["name"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="PackageItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "quantity",
                    models.PositiveIntegerField(
                        help_text="Units of the product required per package.",
                        null=True,
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                (
                    "is_choice_item",
                    models.BooleanField(
                        default=False,
                        help_text="Part of a group of alternatives the customer chooses from.",
                    ),
                ),
                ("choice_group", models.CharField(blank=True, max_length=50, null=True)),
                ("display_order", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "package",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="packages.package",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="package_items",
                        to="products.product",
                    ),
                ),
            ],
            options={
                "verbose_name": "Package Item",
                "verbose_name_plural": "Package Items",
                "ordering": ["display_order", "id"],
                "indexes": [
                    models.Index(fields=["package", "product"], name="package_item_pkg_prod_idx"),
                    models.Index(fields=["product"], name="package_item_product_idx"),
                ],
            },
        ),
        migrations.AddField(
            model_name="package",
            name="products",
            field=models.ManyToManyField(
                related_name="packages", through="packages.PackageItem", to="products.product"
            ),
        ),
        migrations.AddIndex(
            model_name="package",
            index=models.Index(
                fields=["is_active", "valid_from", "valid_until"], name="package_active_window_idx"
            ),
        ),
    ]
