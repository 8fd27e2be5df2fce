"""API dependencies."""

from fastapi import Depends, Request

from svg_holder.config import Settings
from svg_holder.db.mongo import MongoManager
from svg_holder.db.repository import BaseSvgRepository, MongoSvgRepository
from svg_holder.services.svg_service import SvgService


def get_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_mongo(request: Request) -> MongoManager:
    """Get the application's connection manager."""
    return request.app.state.mongo


def get_svg_repository(
    mongo: MongoManager = Depends(get_mongo),
    settings: Settings = Depends(get_settings),
) -> BaseSvgRepository:
    """Get the SVG repository. Fails with NotConnectedError before startup."""
    return MongoSvgRepository(mongo.get_collection(settings.mongodb_collection))


def get_svg_service(
    repository: BaseSvgRepository = Depends(get_svg_repository),
    settings: Settings = Depends(get_settings),
) -> SvgService:
    """Get the SVG service."""
    return SvgService(repository, max_upload_size=settings.max_upload_size)
