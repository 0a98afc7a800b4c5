# shared/common/middleware.py
"""
Request tracing and access logging middleware
"""

import uuid
import time
import logging
from typing import Callable
from django.http import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

HEALTH_PATHS = ('/health/', '/health/ready/', '/health/live/')


def get_client_ip(request: HttpRequest) -> str:
    """Extract client IP from request, honouring X-Forwarded-For"""
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        return x_forwarded_for.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR', '')


class RequestIDMiddleware:
    """
    Attaches a request ID to every request and echoes it back in the
    ``X-Request-ID`` response header. A client supplied ID is kept.
    """

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request_id = request.headers.get('X-Request-ID') or str(uuid.uuid4())
        request.request_id = request_id

        response = self.get_response(request)
        response['X-Request-ID'] = request_id
        return response


class LoggingMiddleware:
    """
    Logs the start and the outcome of each request.
    Responses with an error status are logged as warnings.
    """

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        if request.path in HEALTH_PATHS:
            return self.get_response(request)

        start_time = time.time()
        request_id = getattr(request, 'request_id', None)

        logger.info(
            f"Request started: {request.method} {request.path}",
            extra={
                'request_id': request_id,
                'method': request.method,
                'path': request.path,
                'ip_address': get_client_ip(request),
            }
        )

        response = self.get_response(request)
        duration = time.time() - start_time

        # DRF authenticates lazily, so the user is only known afterwards
        user = getattr(request, 'user', None)
        log_method = logger.warning if response.status_code >= 400 else logger.info
        log_method(
            f"Request completed: {request.method} {request.path} - {response.status_code}",
            extra={
                'request_id': request_id,
                'method': request.method,
                'path': request.path,
                'status_code': response.status_code,
                'duration_ms': round(duration * 1000, 2),
                'user_id': str(getattr(user, 'id', None)),
            }
        )

        response['X-Response-Time'] = f"{duration * 1000:.2f}ms"
        return response
