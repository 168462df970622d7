"""
Error page catalogue.

Titles and messages shown for page-level failures, plus the HTTP
status mapping and error reference IDs used in API error bodies.

Dependencies: None
System role: User-facing error presentation
"""

import random
import string
import time
from dataclasses import dataclass


@dataclass(frozen=True)
class ErrorType:
    """Display data for one error category."""

    title: str
    message: str


ERROR_TYPES: dict[str, ErrorType] = {
    "404": ErrorType("404 - Page Not Found", "The page you are looking for doesn't exist."),
    "500": ErrorType("500 - Server Error", "Our servers are experiencing issues."),
    "401": ErrorType("401 - Unauthorized", "Your session has expired. Please log in again."),
    "403": ErrorType("403 - Access Denied", "You don't have permission to access this resource."),
    "timeout": ErrorType("Request Timeout", "The request took too long to complete."),
    "file": ErrorType("File Upload Error", "There was an issue uploading your file."),
    "generic": ErrorType("Something Went Wrong", "An unexpected error occurred."),
}

_BASE36 = string.digits + string.ascii_lowercase


def get_error_type(code: str | int | None) -> ErrorType:
    """Look up an error category, falling back to generic."""
    return ERROR_TYPES.get(str(code), ERROR_TYPES["generic"])


def status_message(status_code: int) -> str:
    """
    Map an HTTP status to a short description.

    Args:
        status_code: HTTP status code

    Returns:
        str: Description used in error details
    """
    if status_code == 404:
        return "Requested resource not found"
    if status_code == 401:
        return "Authentication required"
    if status_code == 403:
        return "Access forbidden"
    if status_code == 500:
        return "Internal server error"
    if status_code >= 500:
        return "Server error"
    return f"Server returned {status_code}"


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_error_id() -> str:
    """Generate a reference ID like ERR-LZ3K9Q1A-4F7XK2M9B."""
    timestamp = _to_base36(int(time.time() * 1000))
    suffix = "".join(random.choices(_BASE36, k=9))
    return f"ERR-{timestamp}-{suffix}".upper()
