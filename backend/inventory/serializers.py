from rest_framework import serializers
from .services import InventoryService


class StockAdjustmentSerializer(serializers.Serializer):
    """
    Signed stock adjustment for a single product.
    - Positive quantity_change: adds stock.
    - Negative quantity_change: removes stock.
    """
    product_id = serializers.UUIDField()
    quantity_change = serializers.DecimalField(max_digits=12, decimal_places=2)
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    reference_id = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")

    def validate_quantity_change(self, value):
        if value == 0:
            raise serializers.ValidationError("Quantity change cannot be zero.")
        return value

    def save(self, user=None):
        return InventoryService.adjust_stock(
            self.validated_data["product_id"],
            self.validated_data["quantity_change"],
            reason=self.validated_data["reason"],
            reference_id=self.validated_data["reference_id"],
            user=user,
        )
