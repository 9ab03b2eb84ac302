"""
Per-request logging.

Every request gets an id (taken from ``X-Request-ID`` when the caller sends
one) that is bound into the structlog context and echoed back in the
response headers along with the handling time.
"""

import time
import uuid
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from repairshop.config import bind_request_context, clear_request_context, get_logger

logger = get_logger(__name__)

# Polled by monitors; logged at debug so they do not drown real traffic
_QUIET_PATHS = ("/health", "/api/health")


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        bind_request_context(request_id=request_id, path=request.url.path)
        quiet = request.url.path in _QUIET_PATHS
        started = time.perf_counter()
        (logger.debug if quiet else logger.info)(
            "request_started",
            method=request.method,
            client=request.client.host if request.client else "unknown",
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                method=request.method,
                error=str(e),
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise
        finally:
            clear_request_context()

        duration_ms = (time.perf_counter() - started) * 1000
        if quiet:
            log = logger.debug
        elif response.status_code >= 500:
            log = logger.error
        elif response.status_code >= 400:
            log = logger.warning
        else:
            log = logger.info
        log(
            "request_completed",
            request_id=request_id,
            path=request.url.path,
            method=request.method,
            status=response.status_code,
            duration_ms=round(duration_ms, 2),
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        return response
