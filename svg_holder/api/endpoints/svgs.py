"""SVG endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status

from svg_holder.api.deps import get_settings, get_svg_service
from svg_holder.config import Settings
from svg_holder.schemas.svg import MessageResponse, SvgListResponse, SvgResponse, SvgUpdate
from svg_holder.services.svg_service import SvgService

router = APIRouter()


@router.get("", response_model=SvgListResponse)
async def list_svgs(service: SvgService = Depends(get_svg_service)):
    """List all SVGs in store order."""
    records = await service.get_all()
    return SvgListResponse(data=records, count=len(records))


@router.post("", response_model=SvgResponse, status_code=status.HTTP_201_CREATED)
async def create_svg(
    request: Request,
    name: Optional[str] = Form(None, description="Display name"),
    description: Optional[str] = Form(None, description="Description, may be empty"),
    file: Optional[UploadFile] = File(None, description="SVG file"),
    service: SvgService = Depends(get_svg_service),
    settings: Settings = Depends(get_settings),
):
    """Upload an SVG file.

    - Rejects files that are not SVG by MIME type or extension
    - Rejects files larger than the configured ceiling
    - Requires the description field, though it may be empty
    - Stores the markup verbatim with its byte size and original filename
    """
    # Form parsing turns an empty value into None; only a missing field is an error
    form = await request.form()
    if "description" in form:
        description = description or ""
    else:
        description = None

    content = None
    filename = None
    content_type = None
    if file is not None:
        # One byte past the ceiling is enough to detect an oversized upload
        content = await file.read(settings.max_upload_size + 1)
        filename = file.filename
        content_type = file.content_type
        await file.close()

    record = await service.create(
        name=name,
        description=description,
        filename=filename,
        content_type=content_type,
        content=content,
    )
    return SvgResponse(data=record, message="SVG uploaded successfully")


@router.get("/search", response_model=SvgListResponse)
async def search_svgs(
    q: Optional[str] = Query(None, description="Substring to match in name or description"),
    service: SvgService = Depends(get_svg_service),
):
    """Search SVGs by name or description (case-insensitive substring)."""
    records = await service.search(q)
    return SvgListResponse(data=records, count=len(records))


@router.get("/{svg_id}", response_model=SvgResponse)
async def get_svg(svg_id: str, service: SvgService = Depends(get_svg_service)):
    """Get a single SVG by ID."""
    record = await service.get_by_id(svg_id)
    return SvgResponse(data=record)


@router.put("/{svg_id}", response_model=SvgResponse)
async def update_svg(
    svg_id: str,
    body: SvgUpdate,
    service: SvgService = Depends(get_svg_service),
):
    """Update an SVG (partial)."""
    record = await service.update(svg_id, body)
    return SvgResponse(data=record, message="SVG updated successfully")


@router.delete("/{svg_id}", response_model=MessageResponse)
async def delete_svg(svg_id: str, service: SvgService = Depends(get_svg_service)):
    """Delete an SVG."""
    await service.delete(svg_id)
    return MessageResponse(message="SVG deleted successfully")
