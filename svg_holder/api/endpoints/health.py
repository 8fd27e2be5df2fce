"""Health check endpoints."""

import logging
import resource
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from svg_holder.api.deps import get_mongo, get_settings
from svg_holder.config import Settings
from svg_holder.db.mongo import MongoManager

router = APIRouter()
logger = logging.getLogger(__name__)


def _process_stats(request: Request) -> dict:
    usage = resource.getrusage(resource.RUSAGE_SELF)
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        "memory": {"maxRssKb": usage.ru_maxrss},
    }


@router.get("/health")
async def health_check(
    request: Request,
    mongo: MongoManager = Depends(get_mongo),
    settings: Settings = Depends(get_settings),
):
    """Report process stats and whether the database answers a ping."""
    try:
        await mongo.ping()
    except Exception as e:
        logger.warning(f"Health check: database unavailable: {e}")
        return {
            "success": False,
            "message": "SVG Holder API is running but database is disconnected",
            **_process_stats(request),
            "database": "disconnected",
            "error": str(e) if settings.is_development else "Database unavailable",
        }

    return {
        "success": True,
        "message": "SVG Holder API is running",
        **_process_stats(request),
        "database": "connected",
    }


@router.get("/keepalive")
async def keepalive():
    """Cheap endpoint for uptime pingers that keep the host awake."""
    return {
        "success": True,
        "message": "Server is alive",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
