from django.contrib import admin
from core_backend.admin_mixins import ArchivingAdminMixin
from .models import Package, PackageItem
from .services import get_availability_service
import logging

logger = logging.getLogger(__name__)


class PackageItemInline(admin.TabularInline):
    model = PackageItem
    extra = 1
    autocomplete_fields = ("product",)
    fields = ("product", "quantity", "is_choice_item", "choice_group", "display_order")


@admin.register(Package)
class PackageAdmin(ArchivingAdminMixin, admin.ModelAdmin):
    list_display = (
        "name",
        "package_code",
        "package_type",
        "base_price",
        "valid_from",
        "valid_until",
        "max_sellable",
        "is_active",
    )
    list_filter = ("package_type", "is_addon_eligible")
    search_fields = ("name", "package_code")
    inlines = [PackageItemInline]

    @admin.display(description="Max sellable")
    def max_sellable(self, obj):
        """Current availability, served from the availability cache when possible."""
        try:
            return get_availability_service().calculate_package_availability(obj.pk).max_sellable
        except Exception as e:
            logger.warning(f"Could not compute availability for package {obj.pk}: {e}")
            return "-"
