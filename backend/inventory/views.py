import logging
import time

from rest_framework import status
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from core_backend.utils.responses import elapsed_ms, error_response, success_response
from packages.exceptions import PackageAvailabilityError
from packages.serializers import ProductPackageImpactSerializer
from packages.services import get_availability_service
from .serializers import StockAdjustmentSerializer

logger = logging.getLogger(__name__)


class AdjustStockView(APIView):
    """
    An endpoint to add or remove stock for a single product.
    The adjustment is row-locked and audited; see InventoryService.adjust_stock.
    """

    permission_classes = [IsAdminUser]

    def post(self, request, *args, **kwargs):
        serializer = StockAdjustmentSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"success": False, "error": serializer.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )

        result = serializer.save(user=request.user)
        if not result["success"]:
            return Response(result, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            {
                "success": True,
                "product_name": result["product_name"],
                "quantity_before": str(result["quantity_before"]),
                "quantity_after": str(result["quantity_after"]),
            },
            status=status.HTTP_200_OK,
        )


class ProductPackageImpactView(APIView):
    """
    Which active packages use a product and how available each one is.
    Used to judge the effect of restocking or running out of a product.
    """

    def get(self, request, product_id, *args, **kwargs):
        started = time.perf_counter()
        try:
            impact = get_availability_service().get_product_package_impact(str(product_id))
        except PackageAvailabilityError as e:
            if e.status_code >= 500:
                logger.error(f"Package impact lookup failed for product {product_id}: {e}")
            return error_response(e.code, e.message, e.status_code)
        except Exception as e:
            logger.error(f"Unexpected error getting package impact for product {product_id}: {e}")
            return error_response(
                "AVAILABILITY_CALCULATION_ERROR",
                "Failed to get product package impact",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return success_response(
            ProductPackageImpactSerializer(impact).data,
            meta={"duration_ms": elapsed_ms(started)},
        )
