"""Middleware: request ID injection, structured access logging."""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("metadata_health.access")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Inject a unique request ID into each request and response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Structured access log: request_id, client ip, endpoint, status, latency."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.monotonic()
        response = await call_next(request)
        elapsed_ms = round((time.monotonic() - start) * 1000, 1)

        request_id = getattr(request.state, "request_id", "-")
        client_ip = request.client.host if request.client else "-"

        logger.info(
            "request_id=%s ip=%s method=%s path=%s status=%d elapsed_ms=%.1f",
            request_id,
            client_ip,
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response
