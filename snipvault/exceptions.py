"""Custom exception hierarchy for SnipVault."""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    # Snippet errors
    SNIPPET_NOT_FOUND = "SNIPPET_NOT_FOUND"

    # Version errors
    VERSION_NOT_FOUND = "VERSION_NOT_FOUND"
    VERSION_CONFLICT = "VERSION_CONFLICT"

    # Argument errors
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    CROSS_SNIPPET_COMPARISON = "CROSS_SNIPPET_COMPARISON"

    # Storage errors
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
    DEADLINE_EXCEEDED = "DEADLINE_EXCEEDED"

    # Generic errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class SnipVaultException(Exception):
    """
    Base exception for all SnipVault errors.

    Provides structured error values with:
    - Human-readable message
    - Machine-readable error code
    - HTTP status code (used only by the API layer)
    - Optional additional details
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            status_code: HTTP status code to return
            details: Optional additional context/details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for JSON response.

        Returns:
            Dictionary with error, message, and details fields
        """
        return {
            "error": self.error_code.value,
            "message": self.message,
            "details": self.details
        }


class SnippetNotFoundError(SnipVaultException):
    """Snippet not found in database."""

    def __init__(self, snippet_id: str):
        super().__init__(
            f"Snippet not found: {snippet_id}",
            ErrorCode.SNIPPET_NOT_FOUND,
            status_code=404,
            details={"snippet_id": snippet_id}
        )


class VersionNotFoundError(SnipVaultException):
    """Version not found, or not part of the snippet it was requested for."""

    def __init__(self, version_id: str, snippet_id: Optional[str] = None):
        details = {"version_id": version_id}
        if snippet_id:
            details["snippet_id"] = snippet_id
        super().__init__(
            f"Version not found: {version_id}",
            ErrorCode.VERSION_NOT_FOUND,
            status_code=404,
            details=details
        )


class VersionConflictError(SnipVaultException):
    """A version with this number already exists for the snippet.

    Raised on duplicate initial-version creation and when a numbering race
    slips past the allocator. A retry that hits this error after an
    unacknowledged write most likely succeeded the first time; reconcile by
    reading the history.
    """

    def __init__(self, snippet_id: str, version_number: int):
        super().__init__(
            f"Version {version_number} already exists for snippet {snippet_id}",
            ErrorCode.VERSION_CONFLICT,
            status_code=409,
            details={"snippet_id": snippet_id, "version_number": version_number}
        )


class InvalidArgumentError(SnipVaultException):
    """Request arguments are logically invalid."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message,
            ErrorCode.INVALID_ARGUMENT,
            status_code=400,
            details=details
        )


class CrossSnippetComparisonError(InvalidArgumentError):
    """Two versions from different snippets cannot be compared."""

    def __init__(self, from_version_id: str, to_version_id: str):
        super().__init__("Versions belong to different snippets")
        self.error_code = ErrorCode.CROSS_SNIPPET_COMPARISON
        self.details = {
            "from_version_id": from_version_id,
            "to_version_id": to_version_id,
        }


class TransientStorageError(SnipVaultException):
    """Persistence backend unavailable. The whole operation may be retried."""

    def __init__(self, message: str = "Storage temporarily unavailable", original_error: Optional[Exception] = None):
        details = {"retryable": True}
        if original_error:
            details["original_error"] = str(original_error)

        super().__init__(
            message,
            ErrorCode.STORAGE_UNAVAILABLE,
            status_code=503,
            details=details
        )


class DeadlineExceededError(SnipVaultException):
    """Caller deadline passed before the transaction could commit."""

    def __init__(self, operation: str):
        super().__init__(
            f"Deadline exceeded before commit: {operation}",
            ErrorCode.DEADLINE_EXCEEDED,
            status_code=504,
            details={"operation": operation}
        )
