"""
Request logging middleware.

Tags each request with a correlation ID (taken from X-Correlation-ID or
freshly generated), echoes it on the response, and logs one summary line
per request with method, path, status and duration.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.audit.logger import correlation_id_ctx, set_correlation_id

logger = logging.getLogger("payment_gateway.http")

CORRELATION_ID_HEADER = "X-Correlation-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_ID_HEADER))
        started = time.monotonic()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[CORRELATION_ID_HEADER] = correlation_id
            return response
        finally:
            logger.info(
                "%s %s %d %dms",
                request.method,
                request.url.path,
                status_code,
                int((time.monotonic() - started) * 1000),
            )
            correlation_id_ctx.set("-")
