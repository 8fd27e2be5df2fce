"""Error taxonomy shared by the service layers.

Every error carries the HTTP status it maps to and a message that is safe to
show to API clients. The HTTP boundary translates them in one place
(``svg_holder.api.errors``).
"""


class SvgHolderError(Exception):
    """Base class for all application errors."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(SvgHolderError):
    """Missing or malformed input."""

    status_code = 400
    default_message = "Invalid request"


class InvalidFileTypeError(ValidationError):
    """Upload is not recognized as SVG content."""

    default_message = "Only SVG files are allowed"


class FileTooLargeError(ValidationError):
    """Upload exceeds the configured size ceiling."""

    default_message = "File size too large"

    def __init__(self, max_size: int, message: str = None):
        self.max_size = max_size
        if message is None:
            max_mb = max(1, max_size // (1024 * 1024))
            message = f"File size too large. Maximum size is {max_mb}MB."
        super().__init__(message)


class InvalidIdError(ValidationError):
    """Identifier is not a well-formed document id."""

    default_message = "Invalid SVG ID"


class NotFoundError(SvgHolderError):
    """Requested record does not exist."""

    status_code = 404
    default_message = "SVG not found"


class RequestTimeoutError(SvgHolderError, TimeoutError):
    """Request did not complete within the configured bound."""

    status_code = 408
    default_message = "Request timeout"


class StoreError(SvgHolderError):
    """Generic backing-store failure."""

    default_message = "Database operation failed"


class StoreConnectionError(StoreError, ConnectionError):
    """Store is unreachable or rejected the credentials."""

    default_message = "Failed to connect to database"


class NotConnectedError(StoreError):
    """Store handle requested before a successful connect."""

    default_message = "Database not connected. Call connect() first."
