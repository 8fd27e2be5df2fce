"""Request timeout middleware."""

import asyncio
import logging

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from svg_holder.exceptions import RequestTimeoutError

logger = logging.getLogger(__name__)


class RequestTimeoutMiddleware:
    """Caps total handler time. If exceeded, responds 408.

    Store operations already dispatched by the handler are not rolled back
    or guaranteed to be cancelled at the server.
    """

    def __init__(self, app: ASGIApp, timeout_seconds: float = 30.0) -> None:
        self.app = app
        self.timeout_seconds = timeout_seconds

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def _send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(self.app(scope, receive, _send), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning(
                f"Request {scope.get('method')} {scope.get('path')} "
                f"timed out after {self.timeout_seconds}s"
            )
            if response_started:
                return
            error = RequestTimeoutError()
            response = JSONResponse(
                status_code=error.status_code,
                content={"success": False, "message": error.message},
            )
            await response(scope, receive, send)
