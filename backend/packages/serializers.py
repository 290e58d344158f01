from rest_framework import serializers

from packages.services import AvailabilityFormat


def _stock_field(**kwargs):
    return serializers.DecimalField(
        max_digits=12, decimal_places=2, coerce_to_string=False, **kwargs
    )


# ============================================================================
# QUERY PARAMETERS
# ============================================================================

class AvailabilityQuerySerializer(serializers.Serializer):
    """Query string of the package availability list endpoint."""
    includeInactive = serializers.BooleanField(required=False, default=False)
    forceRefresh = serializers.BooleanField(required=False, default=False)
    format = serializers.ChoiceField(
        choices=AvailabilityFormat.choices,
        required=False,
        default=AvailabilityFormat.SUMMARY,
    )


class SingleAvailabilityQuerySerializer(serializers.Serializer):
    forceRefresh = serializers.BooleanField(required=False, default=False)


# ============================================================================
# AVAILABILITY RESULTS (read-only, built from service dataclasses)
# ============================================================================

class ComponentAvailabilitySerializer(serializers.Serializer):
    product_id = serializers.CharField()
    product_name = serializers.CharField()
    current_stock = _stock_field()
    required_per_package = serializers.IntegerField(allow_null=True)
    max_packages = serializers.IntegerField(allow_null=True)
    is_choice_item = serializers.BooleanField()
    choice_group = serializers.CharField(allow_null=True)


class BottleneckProductSerializer(serializers.Serializer):
    product_id = serializers.CharField()
    product_name = serializers.CharField()
    current_stock = _stock_field()
    required_per_package = serializers.IntegerField()


class PackageAvailabilitySerializer(serializers.Serializer):
    package_id = serializers.CharField()
    package_name = serializers.CharField()
    max_sellable = serializers.IntegerField()
    bottleneck_product = BottleneckProductSerializer(allow_null=True)
    component_availability = ComponentAvailabilitySerializer(many=True)
    calculated_at = serializers.DateTimeField(allow_null=True)


class BottleneckSummarySerializer(serializers.Serializer):
    product_name = serializers.CharField()
    current_stock = _stock_field()


class PackageAvailabilitySummarySerializer(serializers.Serializer):
    package_id = serializers.CharField()
    package_name = serializers.CharField()
    max_sellable = serializers.IntegerField()
    status = serializers.CharField()
    bottleneck = BottleneckSummarySerializer(allow_null=True)


class PackageImpactInfoSerializer(serializers.Serializer):
    package_id = serializers.CharField()
    package_name = serializers.CharField()
    quantity_per_package = serializers.IntegerField()
    max_sellable = serializers.IntegerField()
    package_type = serializers.CharField()


class ProductPackageImpactSerializer(serializers.Serializer):
    product_id = serializers.CharField()
    product_name = serializers.CharField()
    current_stock = _stock_field()
    affected_packages = PackageImpactInfoSerializer(many=True)
    total_packages_impacted = serializers.IntegerField()
    minimum_package_availability = serializers.IntegerField(allow_null=True)
