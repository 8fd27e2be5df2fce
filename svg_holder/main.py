"""Main FastAPI application."""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from svg_holder import __version__
from svg_holder.api import api_router
from svg_holder.api.errors import register_exception_handlers
from svg_holder.config import Settings, settings as default_settings
from svg_holder.db.mongo import MongoManager
from svg_holder.exceptions import StoreConnectionError
from svg_holder.logging_config import setup_logging
from svg_holder.middleware import (
    KeepAliveMiddleware,
    RequestLoggingMiddleware,
    RequestTimeoutMiddleware,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect before serving; close the connection on shutdown.

    A failed initial connect is fatal: the exception propagates and the
    server never starts accepting requests.
    """
    settings: Settings = app.state.settings
    mongo: MongoManager = app.state.mongo

    try:
        await mongo.connect(settings.mongodb_uri, settings.mongodb_db_name)
    except StoreConnectionError:
        logger.critical("Failed to start server: database connection failed")
        raise

    logger.info(f"Server ready on port {settings.api_port}")
    logger.info(f"Health check: http://localhost:{settings.api_port}/api/health")
    logger.info(f"SVG API: http://localhost:{settings.api_port}/api/svgs")

    try:
        yield
    finally:
        logger.info("Shutting down server...")
        try:
            await mongo.close()
        except Exception as e:
            logger.error(f"Error while closing database connection: {e}", exc_info=True)


def create_app(
    settings: Optional[Settings] = None,
    mongo: Optional[MongoManager] = None,
) -> FastAPI:
    """Build the application.

    Args:
        settings: Settings to use instead of the environment-loaded ones
        mongo: Connection manager to use instead of a fresh one
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.environment)

    app = FastAPI(
        title="SVG Holder API",
        description="Store, browse and search SVG assets",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.mongo = mongo or MongoManager(timeout_ms=settings.mongodb_timeout_ms)
    app.state.started_at = time.monotonic()

    # Added innermost first; CORS must wrap everything so error and timeout
    # responses still carry CORS headers.
    app.add_middleware(RequestTimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(KeepAliveMiddleware, timeout_seconds=settings.request_timeout_seconds)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "svg_holder.main:app",
        host=default_settings.api_host,
        port=default_settings.api_port,
        reload=default_settings.api_reload,
    )
