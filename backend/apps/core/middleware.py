"""
Core middleware.
"""

import time
from collections.abc import Callable
from uuid import UUID, uuid4

import structlog
from django.http import HttpRequest, HttpResponse

from apps.core.logging import get_logger
from apps.core.utils import get_client_ip

logger = get_logger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"


def _parse_correlation_id(value: str | None) -> UUID | None:
    if not value:
        return None
    try:
        return UUID(value)
    except ValueError:
        return None


class CorrelationIdMiddleware:
    """
    Attaches a correlation ID to every request.

    Reuses a valid UUID from the X-Correlation-ID header or generates one,
    binds it to the structlog context for the duration of the request and
    echoes it on the response. Logs one request_finished event per request.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        correlation_id = _parse_correlation_id(request.headers.get(CORRELATION_ID_HEADER)) or uuid4()
        request.correlation_id = correlation_id  # type: ignore[attr-defined]

        structlog.contextvars.bind_contextvars(
            correlation_id=str(correlation_id),
            **{"network.client.ip": get_client_ip(request, "")},
        )
        started = time.perf_counter()
        try:
            response = self.get_response(request)
            logger.info(
                "request_finished",
                **{
                    "http.method": request.method,
                    "http.url_details.path": request.path,
                    "http.status_code": response.status_code,
                },
                duration_ms=(time.perf_counter() - started) * 1000,
            )
        finally:
            structlog.contextvars.clear_contextvars()

        response[CORRELATION_ID_HEADER] = str(correlation_id)
        return response
