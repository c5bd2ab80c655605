class TowerClientError(Exception):
    """Base class for exceptions in this module."""


class ParseError(TowerClientError, ValueError):
    """Raised when a document is not valid JSON (or YAML, for extra vars)."""


class TowerConnectionError(TowerClientError):
    """Raised when the transport cannot reach the API."""


class ApiError(TowerClientError):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ResourceNotFound(ApiError):
    """Raised when the API answers with a 404."""
