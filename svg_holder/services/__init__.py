"""Business logic services."""

from svg_holder.services.svg_service import SvgService
from svg_holder.services.upload_validator import is_svg_upload, validate_svg_upload

__all__ = ["SvgService", "is_svg_upload", "validate_svg_upload"]
