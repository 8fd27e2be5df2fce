"""Database access: connection lifecycle and SVG repository."""

from svg_holder.db.mongo import ConnectionState, MongoManager
from svg_holder.db.repository import BaseSvgRepository, MongoSvgRepository

__all__ = ["ConnectionState", "MongoManager", "BaseSvgRepository", "MongoSvgRepository"]
