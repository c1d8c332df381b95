"""
common.middleware
~~~~~~~~~~~~~~~~~
Structured JSON request-logging middleware powered by structlog.

Binds a per-request id into the structlog context so every event logged
while serving the request carries it, then logs method, path, status_code
and duration_ms once the response is ready.
"""
import time
import uuid

import structlog

logger = structlog.get_logger(__name__)


class StructuredLoggingMiddleware:
    """
    Middleware that emits one structured log record per HTTP request.

    Log record fields:
        event       – "http_request"
        request_id  – Random hex id, also returned as ``X-Request-ID``
        method      – HTTP verb (GET, POST, …)
        path        – URL path
        status      – HTTP response status code (int)
        duration_ms – Round-trip duration in milliseconds (float, 2 dp)
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start = time.monotonic()
        response = self.get_response(request)
        duration_ms = round((time.monotonic() - start) * 1000, 2)

        logger.info(
            "http_request",
            method=request.method,
            path=request.get_full_path(),
            status=response.status_code,
            duration_ms=duration_ms,
        )
        response["X-Request-ID"] = request_id
        structlog.contextvars.clear_contextvars()
        return response
