"""
Exception hierarchy for the VoiceCraft front end.

Every failure the front end can report is one of these. Each carries a
user-facing message plus a details dict for logs; the API layer maps the
type to an HTTP status.

Dependencies: None
System role: Domain error types
"""

from typing import Any


class VoiceCraftException(Exception):
    """Base exception for all VoiceCraft application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(VoiceCraftException):
    """Raised when input validation fails before any network call."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)


class AuthenticationError(VoiceCraftException):
    """Raised when the identity provider rejects an operation."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize authentication error.

        Args:
            message: User-facing message (already mapped from the provider code)
            code: Provider error code, e.g. NotAuthorizedException
            details: Additional context
        """
        details = details or {}
        if code:
            details["code"] = code
        self.code = code
        super().__init__(message, details)


class NotSignedInError(AuthenticationError):
    """Raised when an operation needs a session and there is none."""

    def __init__(self, message: str = "You are not signed in.") -> None:
        super().__init__(message, code="NotSignedIn")


class JobsApiError(VoiceCraftException):
    """Raised when the jobs REST API answers with a non-OK status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize jobs API error.

        Args:
            message: Error message
            status_code: HTTP status returned by the API
            details: Additional context
        """
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        self.status_code = status_code
        super().__init__(message, details)


class JobNotFoundError(JobsApiError):
    """Raised when the API reports a job as absent (404)."""

    def __init__(self, job_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize job not found error.

        Args:
            job_id: ID of the missing job
            details: Additional context
        """
        details = details or {}
        details["job_id"] = job_id
        self.job_id = job_id
        super().__init__(f"Job not found: {job_id}", 404, details)


class TransientNetworkError(VoiceCraftException):
    """Raised when a request fails below HTTP (DNS, connect, timeout)."""


class MalformedResponseError(VoiceCraftException):
    """Raised when a response body cannot be parsed into the expected shape."""


class UploadError(VoiceCraftException):
    """Raised when credential refresh or the storage write fails."""


class DeleteError(VoiceCraftException):
    """Raised when a job deletion is not confirmed by the API."""


class DownloadLinkError(VoiceCraftException):
    """Raised when a download link cannot be minted."""
