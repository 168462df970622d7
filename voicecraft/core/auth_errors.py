"""
Identity provider error mapping.

Maps Cognito error codes to fixed, user-facing messages so that every
authentication failure reads the same regardless of which flow raised it.

Dependencies: botocore
System role: Authentication error presentation
"""

from botocore.exceptions import ClientError

DEFAULT_AUTH_MESSAGE = "Something went wrong. Please try again."

AUTH_ERROR_MESSAGES: dict[str, str] = {
    "UsernameExistsException": "An account with this email already exists. Try signing in instead.",
    "InvalidPasswordException": "Password must include uppercase, lowercase, a number, and a special character.",
    "CodeMismatchException": "Incorrect verification code. Please check your email and try again.",
    "ExpiredCodeException": 'That code has expired. Click "Resend code" to get a new one.',
    "TooManyRequestsException": "Too many requests. Please wait a moment and try again.",
    "LimitExceededException": "Too many requests. Please wait a moment and try again.",
    "NotAuthorizedException": "Invalid email or password. Please try again.",
    "UserNotFoundException": "Invalid email or password. Please try again.",
    "UserNotConfirmedException": "Please verify your email address before signing in.",
    "PasswordResetRequiredException": "A password reset is required for this account.",
}


def error_code(exc: Exception) -> str | None:
    """Extract the provider error code from a botocore ClientError."""
    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Code")
    return getattr(exc, "code", None)


def friendly_error(exc: Exception) -> str:
    """
    Map an identity provider error to a human-readable string.

    Args:
        exc: Exception raised by the identity SDK

    Returns:
        str: Fixed message for known codes, otherwise the provider's own
        message, otherwise a generic fallback
    """
    code = error_code(exc)
    if code in AUTH_ERROR_MESSAGES:
        return AUTH_ERROR_MESSAGES[code]

    if isinstance(exc, ClientError):
        message = exc.response.get("Error", {}).get("Message")
    else:
        message = str(exc)
    return message or DEFAULT_AUTH_MESSAGE
