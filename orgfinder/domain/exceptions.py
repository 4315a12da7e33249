"""Domain exceptions for orgfinder.

Defines domain-level exceptions independent of infrastructure concerns.
The presentation layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class OrgFinderException(Exception):
    """Base exception for all orgfinder errors.

    Presentation layer maps these to HTTP responses using message,
    error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class StoreUnavailableException(OrgFinderException):
    """Raised when a read against the record store fails.

    Aborts the whole request; no partial results are returned.
    """

    def __init__(self, operation: str, reason: str | None = None) -> None:
        """Initialize with the failing operation and optional driver message.

        Args:
            operation: Which read failed (e.g. 'resolve_tag_facet').
            reason: Optional underlying error text.
        """
        details: dict[str, Any] = {"operation": operation}
        if reason:
            details["reason"] = reason
        super().__init__(
            f"Record store unavailable during {operation}",
            "STORE_UNAVAILABLE",
            details,
        )


class IndexUnavailableException(OrgFinderException):
    """Raised when the text index cannot be built."""

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(
            "Text index is unavailable",
            "INDEX_UNAVAILABLE",
            {"reason": reason} if reason else {},
        )
