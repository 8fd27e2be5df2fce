"""Upload validation for SVG files."""

from typing import Optional

from svg_holder.exceptions import FileTooLargeError, InvalidFileTypeError, ValidationError

SVG_MIME_TYPES = frozenset({"image/svg+xml", "image/svg"})
SVG_EXTENSION = ".svg"
SVG_TEXT_CONTENT_TYPE = "image/svg+xml"
DEFAULT_MAX_UPLOAD_SIZE = 5 * 1024 * 1024


def is_svg_upload(filename: Optional[str], content_type: Optional[str]) -> bool:
    """Check the declared MIME type, falling back to the filename extension.

    Browsers and curl often send ``application/octet-stream`` for .svg files,
    so either signal is enough.

    Examples:
        >>> is_svg_upload("icon.svg", "application/octet-stream")
        True
        >>> is_svg_upload("icon.png", "image/svg+xml; charset=utf-8")
        True
        >>> is_svg_upload("icon.png", "image/png")
        False
    """
    if content_type:
        mime = content_type.split(";", 1)[0].strip().lower()
        if mime in SVG_MIME_TYPES:
            return True
    return bool(filename) and filename.lower().endswith(SVG_EXTENSION)


def validate_svg_upload(
    filename: Optional[str],
    content_type: Optional[str],
    content: bytes,
    max_size: int = DEFAULT_MAX_UPLOAD_SIZE,
) -> str:
    """Validate an uploaded file and return its content as text.

    The size ceiling is enforced first, so an oversized file is rejected as
    too large whatever type it claims to be. The markup itself is not parsed
    or sanitized: script-bearing SVG passes through unchanged.

    Args:
        filename: Client-supplied filename
        content_type: Declared MIME type, may be None
        content: Raw uploaded bytes
        max_size: Maximum accepted size in bytes

    Returns:
        The content decoded as UTF-8 (undecodable bytes replaced)

    Raises:
        FileTooLargeError: If content is larger than ``max_size``
        InvalidFileTypeError: If neither MIME type nor extension indicate SVG
        ValidationError: If the file is empty
    """
    if len(content) > max_size:
        raise FileTooLargeError(max_size)

    if not is_svg_upload(filename, content_type):
        raise InvalidFileTypeError()

    if not content:
        raise ValidationError("SVG file is empty")

    return content.decode("utf-8", errors="replace")
