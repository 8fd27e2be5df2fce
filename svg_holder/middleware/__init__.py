"""HTTP middleware."""

from svg_holder.middleware.http import KeepAliveMiddleware, RequestLoggingMiddleware
from svg_holder.middleware.timeout import RequestTimeoutMiddleware

__all__ = ["KeepAliveMiddleware", "RequestLoggingMiddleware", "RequestTimeoutMiddleware"]
