"""API router."""

from fastapi import APIRouter

from svg_holder.api.endpoints import health, svgs

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(svgs.router, prefix="/svgs", tags=["svgs"])
