"""
Health Check Module.

Liveness and readiness endpoints for the service.
"""
import logging
import time
from typing import Dict, Any
from datetime import datetime, timezone

from django.db import DatabaseError, connection
from django.conf import settings
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class HealthStatus:
    """Health check status constants."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def check_database() -> Dict[str, Any]:
    """Check database connectivity."""
    start = time.time()
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError as e:
        logger.error(f"Database health check failed: {e}")
        return {
            "name": "database",
            "status": HealthStatus.UNHEALTHY,
            "error": str(e),
        }

    return {
        "name": "database",
        "status": HealthStatus.HEALTHY,
        "latency_ms": round((time.time() - start) * 1000, 2),
    }


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health_check(request):
    """
    Simple health check endpoint.

    Returns 200 if the service is running.
    """
    return Response({
        "status": HealthStatus.HEALTHY,
        "service": getattr(settings, 'SERVICE_NAME', 'unknown'),
        "timestamp": _now(),
    })


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def liveness_check(request):
    """Liveness probe; failures trigger a container restart."""
    return Response({
        "status": "alive",
        "timestamp": _now(),
    })


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def readiness_check(request):
    """
    Readiness probe.

    Returns 503 while the database is unreachable.
    """
    checks = [check_database()]

    if any(c["status"] == HealthStatus.UNHEALTHY for c in checks):
        overall_status = HealthStatus.UNHEALTHY
        status_code = 503
    else:
        overall_status = HealthStatus.HEALTHY
        status_code = 200

    return Response(
        {
            "status": overall_status,
            "checks": checks,
            "timestamp": _now(),
        },
        status=status_code
    )


def get_health_urlpatterns():
    """
    Returns URL patterns for health check endpoints.

    Usage in urls.py:
        from shared.common.health import get_health_urlpatterns
        urlpatterns += get_health_urlpatterns()
    """
    from django.urls import path

    return [
        path('health/', health_check, name='health'),
        path('health/live/', liveness_check, name='liveness'),
        path('health/ready/', readiness_check, name='readiness'),
    ]
