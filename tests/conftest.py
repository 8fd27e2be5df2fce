"""Pytest configuration and fixtures."""

import copy
from typing import Any, Dict, List, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from svg_holder.api.deps import get_svg_repository
from svg_holder.config import Settings
from svg_holder.db.repository import BaseSvgRepository
from svg_holder.main import create_app


class InMemorySvgRepository(BaseSvgRepository):
    """Dict-backed repository that mimics MongoDB store order and ids."""

    def __init__(self):
        self.documents: Dict[str, Dict[str, Any]] = {}

    async def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        record_id = str(ObjectId())
        self.documents[record_id] = {**document, "id": record_id}
        return copy.deepcopy(self.documents[record_id])

    async def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        record = self.documents.get(record_id)
        return copy.deepcopy(record) if record else None

    async def list_all(self) -> List[Dict[str, Any]]:
        return [copy.deepcopy(record) for record in self.documents.values()]

    async def search(self, query: str) -> List[Dict[str, Any]]:
        needle = query.lower()
        return [
            copy.deepcopy(record)
            for record in self.documents.values()
            if needle in record["name"].lower() or needle in record["description"].lower()
        ]

    async def update(self, record_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        if record_id not in self.documents:
            return None
        self.documents[record_id].update(fields)
        return copy.deepcopy(self.documents[record_id])

    async def delete(self, record_id: str) -> bool:
        return self.documents.pop(record_id, None) is not None


@pytest.fixture
def test_settings():
    """Settings isolated from the developer's environment."""
    return Settings(
        _env_file=None,
        mongodb_uri="mongodb://localhost:27017",
        mongodb_db_name="svg_holder_test",
        environment="development",
        log_level="WARNING",
    )


@pytest.fixture
def repository():
    """Create an empty in-memory repository."""
    return InMemorySvgRepository()


@pytest.fixture
def test_app(test_settings, repository):
    """Create an app whose SVG routes use the in-memory repository."""
    app = create_app(test_settings)
    app.dependency_overrides[get_svg_repository] = lambda: repository
    return app


@pytest.fixture
def client(test_app):
    """Create a test client (lifespan not run, so no MongoDB is needed)."""
    return TestClient(test_app)


@pytest.fixture
def svg_file():
    """A small valid SVG upload as accepted by TestClient ``files=``."""
    return {"file": ("icon.svg", b"<svg/>", "image/svg+xml")}
