"""SVG record persistence."""

import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection


class BaseSvgRepository(ABC):
    """Persistence interface used by the SVG service.

    Records cross this boundary as plain dicts keyed by their stored
    (camelCase) field names, with the document id under ``"id"`` as a string.
    Ids passed in are expected to be well-formed; the service validates them.
    """

    @abstractmethod
    async def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Persist a new record and return it with its generated id."""
        pass

    @abstractmethod
    async def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        """Return the record with this id, or None."""
        pass

    @abstractmethod
    async def list_all(self) -> List[Dict[str, Any]]:
        """Return every record in store order."""
        pass

    @abstractmethod
    async def search(self, query: str) -> List[Dict[str, Any]]:
        """Return records whose name or description contains ``query``.

        Matching is a case-insensitive substring match with no ranking.
        """
        pass

    @abstractmethod
    async def update(self, record_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Set ``fields`` on the record and return it, or None if absent."""
        pass

    @abstractmethod
    async def delete(self, record_id: str) -> bool:
        """Hard-delete the record. Returns False if it did not exist."""
        pass


def document_to_record(document: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a raw MongoDB document into a record dict."""
    record = dict(document)
    record["id"] = str(record.pop("_id"))
    return record


def build_search_filter(query: str) -> Dict[str, Any]:
    """Case-insensitive substring filter over name OR description."""
    pattern = {"$regex": re.escape(query), "$options": "i"}
    return {"$or": [{"name": pattern}, {"description": pattern}]}


class MongoSvgRepository(BaseSvgRepository):
    """Repository backed by a single MongoDB collection."""

    def __init__(self, collection: AsyncCollection):
        self.collection = collection

    async def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        to_insert = dict(document)
        result = await self.collection.insert_one(to_insert)
        to_insert["_id"] = result.inserted_id
        return document_to_record(to_insert)

    async def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        document = await self.collection.find_one({"_id": ObjectId(record_id)})
        if document is None:
            return None
        return document_to_record(document)

    async def list_all(self) -> List[Dict[str, Any]]:
        cursor = self.collection.find({})
        return [document_to_record(doc) async for doc in cursor]

    async def search(self, query: str) -> List[Dict[str, Any]]:
        cursor = self.collection.find(build_search_filter(query))
        return [document_to_record(doc) async for doc in cursor]

    async def update(self, record_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        document = await self.collection.find_one_and_update(
            {"_id": ObjectId(record_id)},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        if document is None:
            return None
        return document_to_record(document)

    async def delete(self, record_id: str) -> bool:
        result = await self.collection.delete_one({"_id": ObjectId(record_id)})
        return result.deleted_count > 0
