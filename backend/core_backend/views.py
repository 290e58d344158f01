from django.http import JsonResponse
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
import logging

from packages.services import get_availability_service

logger = logging.getLogger(__name__)


def health_check(request):
    """Simple health check endpoint that doesn't require authentication"""
    return JsonResponse({"status": "ok", "message": "Backend is running"})


@api_view(['GET'])
@permission_classes([IsAdminUser])
def cache_statistics(request):
    """Package availability cache statistics"""
    return Response({'statistics': get_availability_service().get_cache_stats()})


@api_view(['POST'])
@permission_classes([IsAdminUser])
def invalidate_cache(request):
    """
    Invalidate package availability.

    Body (all optional):
      package_id - drop one package's entry
      product_id - drop entries of every package using the product
    With neither, every entry is dropped and the cache version is bumped.
    """
    package_id = request.data.get('package_id')
    product_id = request.data.get('product_id')
    service = get_availability_service()

    try:
        if package_id:
            service.invalidate_cache(package_id)
            message = f'Availability cache invalidated for package {package_id}'
        elif product_id:
            removed = service.invalidate_cache_for_product(product_id)
            message = f'Availability cache invalidated for {removed} packages using product {product_id}'
        else:
            version = service.notify_stock_changed('manual invalidation')
            message = f'Availability cache cleared (version {version})'
    except Exception as e:
        logger.error(f"Cache invalidation failed: {e}")
        return Response({
            'error': 'Cache invalidation failed',
            'details': str(e)
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response({
        'status': 'success',
        'message': message,
        'statistics': service.get_cache_stats(),
    })
