"""
Shared exception classes for recordsync.
"""

from typing import Any, Dict, Optional


class RecordSyncError(Exception):
    """Base exception for all recordsync errors."""
    pass


class ConfigurationError(RecordSyncError):
    """Raised when there's a configuration issue."""
    pass


class APIError(RecordSyncError):
    """Base class for remote API errors."""
    pass


class TransportError(APIError):
    """Raised when the HTTP transport could not complete a request."""
    pass


class ChangeFetchError(APIError):
    """Raised when pulling changes returns an HTTP error status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class BatchProtocolError(APIError):
    """Raised when a batch response reports a whole-batch failure.

    The server-provided ``message`` becomes the error text; every other field
    of the response body is kept in ``details``.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}
