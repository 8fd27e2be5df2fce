"""SVG asset schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SvgBase(BaseModel):
    """Fields shared by SVG schemas. Serialized in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SvgRecord(SvgBase):
    """A stored SVG asset."""

    id: str = Field(..., description="Record ID")
    name: str = Field(..., description="Display name")
    description: str = Field(..., description="Free-text description, may be empty")
    content: str = Field(..., description="Raw SVG markup")
    file_size: int = Field(..., ge=0, description="Byte length of the stored content")
    original_name: str = Field(..., description="Client-supplied filename")
    created_at: datetime
    updated_at: datetime


class SvgUpdate(SvgBase):
    """Partial update. Any subset of fields may be sent."""

    name: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = Field(None, description="Replacement SVG markup")
    original_name: Optional[str] = None


class SvgResponse(BaseModel):
    """Envelope for a single record."""

    success: bool = True
    data: SvgRecord
    message: Optional[str] = None


class SvgListResponse(BaseModel):
    """Envelope for a list of records."""

    success: bool = True
    data: List[SvgRecord]
    count: int


class MessageResponse(BaseModel):
    """Envelope carrying only a message."""

    success: bool = True
    message: str
