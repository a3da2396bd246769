"""
Ready admin error types.

ValidationDrop is deliberately absent: a malformed record is dropped and
logged, never raised.
"""

from typing import Any, Optional


class ReadyAdminError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details


class NetworkError(ReadyAdminError):
    """Transport failure or a non-success HTTP status."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("network_error", message, details)

    @property
    def status(self) -> Optional[int]:
        return (self.details or {}).get("status")


class FormatError(ReadyAdminError):
    """Response payload does not have the expected shape."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("format_error", message, details)


class AuthError(ReadyAdminError):
    def __init__(self, message: str, code: str = "auth_error", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)
