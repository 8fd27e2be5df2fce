"""Response header and request logging middleware."""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class KeepAliveMiddleware(BaseHTTPMiddleware):
    """Advertise keep-alive on every response."""

    def __init__(self, app, timeout_seconds: float = 30.0):
        super().__init__(app)
        self.keep_alive = f"timeout={int(timeout_seconds)}"

    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["Connection"] = "keep-alive"
        response.headers["Keep-Alive"] = self.keep_alive
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with its origin, status and duration."""

    async def dispatch(self, request: Request, call_next):
        logger.debug(
            f"{request.method} {request.url.path} origin={request.headers.get('origin')}"
        )
        started = time.perf_counter()
        response: Response = await call_next(request)
        duration_ms = round((time.perf_counter() - started) * 1000, 1)
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms}ms)",
            extra={
                "http_method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response
