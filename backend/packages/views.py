import logging
import time

from rest_framework import status
from rest_framework.views import APIView

from core_backend.utils.responses import elapsed_ms, error_response, success_response
from packages.exceptions import PackageAvailabilityError
from packages.serializers import (
    AvailabilityQuerySerializer,
    PackageAvailabilitySerializer,
    PackageAvailabilitySummarySerializer,
    SingleAvailabilityQuerySerializer,
)
from packages.services import AvailabilityFormat, get_availability_service

logger = logging.getLogger(__name__)


def _invalid_parameters(errors):
    return error_response(
        "INVALID_PARAMETERS",
        "Invalid query parameters",
        status.HTTP_400_BAD_REQUEST,
        details=errors,
    )


class PackageAvailabilityView(APIView):
    """
    Real-time availability of a single package.

    GET /api/packages/<uuid>/availability/?forceRefresh=true
    """

    def get(self, request, package_id, *args, **kwargs):
        started = time.perf_counter()
        query = SingleAvailabilityQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return _invalid_parameters(query.errors)

        service = get_availability_service()
        try:
            result, cached = service.get_package_availability(
                str(package_id), force_refresh=query.validated_data["forceRefresh"]
            )
        except PackageAvailabilityError as e:
            if e.status_code >= 500:
                logger.error(f"Availability lookup failed for package {package_id}: {e}")
                return error_response("AVAILABILITY_ERROR", e.message, e.status_code)
            return error_response(e.code, e.message, e.status_code)
        except Exception as e:
            logger.error(f"Unexpected error getting availability for package {package_id}: {e}")
            return error_response(
                "AVAILABILITY_ERROR",
                "Failed to calculate package availability",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return success_response(
            PackageAvailabilitySerializer(result).data,
            meta={"duration_ms": elapsed_ms(started), "cached": cached},
        )


class PackageAvailabilityListView(APIView):
    """
    Availability of every package.

    GET /api/packages/availability/?includeInactive=false&forceRefresh=false&format=summary

    ``format=summary`` returns one row per package with a status; ``format=full``
    returns the complete component breakdown.
    """

    def get(self, request, *args, **kwargs):
        started = time.perf_counter()
        query = AvailabilityQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return _invalid_parameters(query.errors)

        params = query.validated_data
        service = get_availability_service()
        try:
            if params["format"] == AvailabilityFormat.FULL:
                results = service.calculate_all_package_availability(
                    include_inactive=params["includeInactive"],
                    force_refresh=params["forceRefresh"],
                )
                data = PackageAvailabilitySerializer(list(results.values()), many=True).data
            else:
                summaries = service.get_all_package_summaries(
                    include_inactive=params["includeInactive"],
                    force_refresh=params["forceRefresh"],
                )
                data = PackageAvailabilitySummarySerializer(summaries, many=True).data
        except Exception as e:
            logger.error(f"Error calculating availability for all packages: {e}")
            return error_response(
                "AVAILABILITY_CALCULATION_ERROR",
                "Failed to calculate package availability",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return success_response(
            data,
            meta={
                "count": len(data),
                "duration_ms": elapsed_ms(started),
                "cache_stats": service.get_cache_stats(),
            },
        )
