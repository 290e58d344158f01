from django.contrib import admin
from django.urls import reverse
from django.utils.html import format_html
from .models import StockHistoryEntry


@admin.register(StockHistoryEntry)
class StockHistoryEntryAdmin(admin.ModelAdmin):
    list_display = (
        "timestamp",
        "product_link",
        "operation_display",
        "quantity_change_formatted",
        "new_quantity",
        "user",
        "reference_id",
    )
    list_filter = ("operation_type", "timestamp")
    search_fields = ("product__name", "product__sku", "reason", "reference_id")
    date_hierarchy = "timestamp"
    ordering = ("-timestamp",)
    readonly_fields = (
        "timestamp",
        "product",
        "user",
        "operation_type",
        "quantity_change",
        "previous_quantity",
        "new_quantity",
        "reason",
        "reference_id",
    )

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("product", "user")

    def has_add_permission(self, request):
        # History rows are only written by InventoryService
        return False

    def product_link(self, obj):
        """Display product name as a link to the product admin page."""
        url = reverse("admin:products_product_change", args=[obj.product.pk])
        return format_html('<a href="{}">{}</a>', url, obj.product.name)
    product_link.short_description = "Product"

    def quantity_change_formatted(self, obj):
        """Display quantity change with color coding."""
        color = "green" if obj.quantity_change >= 0 else "red"
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color,
            f"{obj.quantity_change:+}",
        )
    quantity_change_formatted.short_description = "Change"
