"""
FastAPI middleware for observability.

CorrelationMiddleware binds one id per request (taken from X-Correlation-ID
or generated) and echoes it back. RequestLoggingMiddleware writes one line
when a request arrives and one when it completes, with status and latency.
Health probes are logged at DEBUG so they do not drown the chat traffic.

Dependencies: fastapi, starlette, chat_backend.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from chat_backend.observability.correlation import (
    clear_correlation_id,
    set_correlation_id,
)

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
QUIET_PATHS = frozenset({"/api/health"})


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each HTTP request and its outcome."""

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        level = logging.DEBUG if path in QUIET_PATHS else logging.INFO
        fields = {"method": request.method, "path": path}

        logger.log(
            level,
            f"{request.method} {path}",
            extra={
                **fields,
                "client_host": request.client.host if request.client else None,
            },
        )

        start = time.perf_counter()
        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{request.method} {path} - unhandled {type(e).__name__}",
                extra={**fields, "process_time_ms": _elapsed_ms(start)},
            )
            raise

        logger.log(
            level,
            f"{request.method} {path} - {response.status_code}",
            extra={
                **fields,
                "status_code": response.status_code,
                "process_time_ms": _elapsed_ms(start),
            },
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Binds the request's correlation ID to the logging context."""

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
