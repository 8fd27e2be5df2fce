"""SVG asset business logic service."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo.errors import PyMongoError

from svg_holder.db.repository import BaseSvgRepository
from svg_holder.exceptions import InvalidIdError, NotFoundError, StoreError, ValidationError
from svg_holder.schemas.svg import SvgRecord, SvgUpdate
from svg_holder.services.upload_validator import (
    DEFAULT_MAX_UPLOAD_SIZE,
    SVG_TEXT_CONTENT_TYPE,
    validate_svg_upload,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _require_text(value: Optional[str], field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required")
    return value


class SvgService:
    """Create, read, update, delete and search SVG records.

    Store failures surface as :class:`StoreError`; lookups of unknown ids as
    :class:`NotFoundError`.
    """

    def __init__(self, repository: BaseSvgRepository, max_upload_size: int = DEFAULT_MAX_UPLOAD_SIZE):
        self.repository = repository
        self.max_upload_size = max_upload_size

    async def create(
        self,
        name: Optional[str],
        description: Optional[str],
        filename: Optional[str],
        content_type: Optional[str],
        content: Optional[bytes],
    ) -> SvgRecord:
        """Validate an upload and persist it as a new record.

        Args:
            name: Display name, must not be blank
            description: Description, may be empty but must be present
            filename: Client filename, stored as ``originalName``
            content_type: Declared MIME type of the upload
            content: Raw uploaded bytes

        Returns:
            The created record

        Examples:
            >>> record = await service.create(
            ...     "My Icon", "A beautiful icon", "icon.svg", "image/svg+xml", b"<svg/>"
            ... )
            >>> record.file_size
            6
        """
        name = _require_text(name, "Name")
        if description is None:
            raise ValidationError("Description is required")
        if content is None:
            raise ValidationError("SVG file is required")

        text = validate_svg_upload(filename, content_type, content, self.max_upload_size)

        now = _utcnow()
        document = {
            "name": name.strip(),
            "description": description,
            "content": text,
            "fileSize": len(content),
            "originalName": filename or "",
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            record = await self.repository.insert(document)
        except PyMongoError as e:
            logger.error(f"Failed to create SVG: {e}", exc_info=True)
            raise StoreError("Failed to create SVG") from e

        logger.info(f"Created SVG {record['id']} ({document['fileSize']} bytes)")
        return SvgRecord.model_validate(record)

    async def get_by_id(self, record_id: str) -> SvgRecord:
        self._check_id(record_id)
        try:
            record = await self.repository.get(record_id)
        except PyMongoError as e:
            logger.error(f"Failed to fetch SVG {record_id}: {e}", exc_info=True)
            raise StoreError("Failed to fetch SVG") from e

        if record is None:
            raise NotFoundError()
        return SvgRecord.model_validate(record)

    async def get_all(self) -> List[SvgRecord]:
        try:
            records = await self.repository.list_all()
        except PyMongoError as e:
            logger.error(f"Failed to list SVGs: {e}", exc_info=True)
            raise StoreError("Failed to fetch SVGs") from e
        return [SvgRecord.model_validate(record) for record in records]

    async def update(self, record_id: str, changes: SvgUpdate) -> SvgRecord:
        """Apply a partial update.

        Any subset of fields may be given; ``updatedAt`` is refreshed even
        when the payload is empty. Replacement ``content`` is SVG text by
        definition, so it is re-validated for size and emptiness only, and
        ``fileSize`` is recomputed.
        """
        self._check_id(record_id)
        fields = self._collect_update_fields(changes)

        if "content" in fields:
            raw = fields["content"].encode("utf-8")
            fields["content"] = validate_svg_upload(
                fields.get("originalName"), SVG_TEXT_CONTENT_TYPE, raw, self.max_upload_size
            )
            fields["fileSize"] = len(raw)

        fields["updatedAt"] = _utcnow()
        try:
            record = await self.repository.update(record_id, fields)
        except PyMongoError as e:
            logger.error(f"Failed to update SVG {record_id}: {e}", exc_info=True)
            raise StoreError("Failed to update SVG") from e

        if record is None:
            raise NotFoundError()

        logger.info(f"Updated SVG {record_id} ({', '.join(sorted(fields))})")
        return SvgRecord.model_validate(record)

    async def delete(self, record_id: str) -> None:
        self._check_id(record_id)
        try:
            deleted = await self.repository.delete(record_id)
        except PyMongoError as e:
            logger.error(f"Failed to delete SVG {record_id}: {e}", exc_info=True)
            raise StoreError("Failed to delete SVG") from e

        if not deleted:
            raise NotFoundError()
        logger.info(f"Deleted SVG {record_id}")

    async def search(self, query: Optional[str]) -> List[SvgRecord]:
        """Case-insensitive substring search over name and description."""
        if query is None or not query.strip():
            raise ValidationError("Search query is required")

        try:
            records = await self.repository.search(query)
        except PyMongoError as e:
            logger.error(f"Search for {query!r} failed: {e}", exc_info=True)
            raise StoreError("Failed to search SVGs") from e
        return [SvgRecord.model_validate(record) for record in records]

    @staticmethod
    def _check_id(record_id: str) -> None:
        if not ObjectId.is_valid(record_id):
            raise InvalidIdError()

    @staticmethod
    def _collect_update_fields(changes: SvgUpdate) -> Dict[str, Any]:
        provided = changes.model_dump(exclude_unset=True, by_alias=True)
        fields: Dict[str, Any] = {}

        if "name" in provided:
            fields["name"] = _require_text(provided["name"], "Name").strip()
        if "description" in provided:
            if provided["description"] is None:
                raise ValidationError("Description cannot be null")
            fields["description"] = provided["description"]
        if "originalName" in provided:
            fields["originalName"] = _require_text(provided["originalName"], "Original name")
        if "content" in provided:
            fields["content"] = _require_text(provided["content"], "Content")

        return fields
