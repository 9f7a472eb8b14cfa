"""Domain exceptions for the search service.

Defines domain-level exceptions that represent failed or invalid searches.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class EsgSearchException(Exception):
    """Base exception for all search service errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, kind).
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
        """Serialize for API responses (error, message, details)."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(EsgSearchException):
    """Raised when input validation fails (e.g. unknown type filter)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class SearchAdapterException(EsgSearchException):
    """One collection adapter failed or timed out.

    Never raised to callers of a search: the orchestrator logs it and
    treats the kind as having produced zero results.
    """

    def __init__(self, kind: str, reason: str) -> None:
        """Initialize with the failing kind and a short reason.

        Args:
            kind: Search kind whose adapter failed (e.g. 'document').
            reason: Description of the underlying failure.
        """
        self.kind = kind
        self.reason = reason
        super().__init__(
            f"Search adapter '{kind}' failed: {reason}",
            "SEARCH_ADAPTER_ERROR",
            {"kind": kind, "reason": reason},
        )


class SearchUnavailableException(EsgSearchException):
    """Every selected adapter failed; the only error a search surfaces."""

    def __init__(self, failures: list[SearchAdapterException]) -> None:
        """Initialize from the individual adapter failures.

        Args:
            failures: One SearchAdapterException per selected adapter.
        """
        self.failures = list(failures)
        super().__init__(
            "search is currently unavailable",
            "SEARCH_UNAVAILABLE",
            {
                "failures": [
                    {"kind": f.kind, "reason": f.reason} for f in self.failures
                ]
            },
        )


class SqlNotConfiguredException(EsgSearchException):
    """Raised when the record store is used but DATABASE_URL is not set."""

    def __init__(self) -> None:
        """Initialize with a message pointing at the missing configuration."""
        super().__init__(
            "Record store is not configured; set DATABASE_URL",
            "SQL_NOT_CONFIGURED",
            {},
        )
