"""Translate application errors into JSON responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from svg_holder.exceptions import SvgHolderError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    """Build the ``{success: false, message}`` envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, **extra},
    )


def _server_error_detail(request: Request, exc: Exception) -> str:
    if request.app.state.settings.is_development:
        return str(exc)
    return "Something went wrong"


async def handle_app_error(request: Request, exc: SvgHolderError) -> JSONResponse:
    """Map a taxonomy error to its status; 5xx details only in development."""
    if exc.status_code >= 500:
        logger.error(
            f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}",
            exc_info=exc.__cause__ is not None,
        )
        return error_response(
            exc.status_code,
            exc.message,
            error=_server_error_detail(request, exc),
        )

    logger.info(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return error_response(exc.status_code, exc.message)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies and parameters as 400."""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid request: {location} {first.get('msg', '')}".strip()
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap routing errors (unknown route, wrong method) in the JSON envelope."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return error_response(exc.status_code, "Route not found")
    return error_response(exc.status_code, str(exc.detail))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort 500 for exceptions outside the taxonomy.

    Starlette runs this handler outside the middleware stack, so these
    responses carry no CORS headers.
    """
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}: {exc}",
        exc_info=True,
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        error=_server_error_detail(request, exc),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install all error handlers on the application."""
    app.add_exception_handler(SvgHolderError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)
