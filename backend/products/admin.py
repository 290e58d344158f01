from django.contrib import admin
from core_backend.admin_mixins import ArchivingAdminMixin
from .models import Product


@admin.register(Product)
class ProductAdmin(ArchivingAdminMixin, admin.ModelAdmin):
    list_display = ("name", "sku", "current_stock", "reorder_point", "base_price", "is_active")
    search_fields = ("name", "sku", "description")
    # Stock only changes through InventoryService so every change is audited
    readonly_fields = ("current_stock", "created_at", "updated_at")
