"""
Response envelope shared by the API views.

Success: {"success": true, "data": ..., "meta": {...}}
Failure: {"success": false, "error": {"code": ..., "message": ...}}
"""
import time

from django.utils import timezone
from rest_framework import status
from rest_framework.response import Response


def success_response(data, meta=None, http_status=status.HTTP_200_OK):
    payload_meta = {"timestamp": timezone.now().isoformat()}
    if meta:
        payload_meta.update(meta)
    return Response({"success": True, "data": data, "meta": payload_meta}, status=http_status)


def error_response(code, message, http_status=status.HTTP_500_INTERNAL_SERVER_ERROR, details=None):
    error = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return Response({"success": False, "error": error}, status=http_status)


def elapsed_ms(started):
    """Milliseconds since ``started`` (a time.perf_counter() reading), rounded."""
    return round((time.perf_counter() - started) * 1000, 2)
