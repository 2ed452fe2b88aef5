"""
Request logging middleware.

Logs method, path, status and latency of every request, tagged with a
correlation id taken from (or added to) the X-Correlation-ID header.
"""

import logging
import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    HTTP middleware for request/response logging.

    Client errors (4xx) are logged as warnings, server errors as errors.
    """

    # High-frequency, low-value paths
    DEFAULT_EXCLUDE_PATHS: tuple[str, ...] = ("/health", "/docs", "/openapi.json", "/favicon.ico")

    def __init__(self, app: ASGIApp, exclude_paths: tuple[str, ...] | None = None) -> None:
        super().__init__(app)
        self._exclude_paths = exclude_paths if exclude_paths is not None else self.DEFAULT_EXCLUDE_PATHS

    def _should_log(self, path: str) -> bool:
        return not any(path.startswith(excluded) for excluded in self._exclude_paths)

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex[:8]
        request.state.correlation_id = correlation_id

        if not self._should_log(request.url.path):
            response = await call_next(request)
            response.headers[CORRELATION_HEADER] = correlation_id
            return response

        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"

        start_time = time.perf_counter()
        logger.info(f"[{correlation_id}] --> {request.method} {target}")

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(f"[{correlation_id}] <-- {request.method} {target} ERROR in {duration_ms:.2f}ms: {e}")
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        if response.status_code >= 500:
            log_level = logging.ERROR
        elif response.status_code >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO
        logger.log(log_level, f"[{correlation_id}] <-- {request.method} {target} {response.status_code} in {duration_ms:.2f}ms")

        response.headers[CORRELATION_HEADER] = correlation_id
        response.headers["X-Response-Time-Ms"] = f"{duration_ms:.2f}"
        return response
