"""
Errors raised while ingesting a form submission.
Each one carries the HTTP status the handler answers with.
"""
from typing import Optional


class IngestError(Exception):
    """Base class for request-level failures turned into a JSON error response."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ConfigurationError(IngestError):
    """Notion token or database id is missing."""

    def __init__(self, message: str = "Server not configured"):
        super().__init__(message, 500)


class MethodNotAllowedError(IngestError):
    def __init__(self, method: str = ""):
        self.method = method
        super().__init__("Method Not Allowed", 405)


class DownstreamRejectionError(IngestError):
    """Notion answered with a non-2xx status. The raw body is surfaced as-is."""

    def __init__(self, body: str, upstream_status: int):
        self.upstream_status = upstream_status
        super().__init__(body, 500)


class TransportError(IngestError):
    def __init__(self, message: str = "Unknown error"):
        super().__init__(message or "Unknown error", 500)


class SchemaError(ValueError):
    """A property schema file is unusable. Raised at load time, not per request."""
