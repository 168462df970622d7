"""
Upload validation and object key construction.

Checks a narration script and the form selections before anything
touches the network, and builds the S3 key the backend parses to
populate job metadata.

Dependencies: None
System role: Upload request validation
"""

import re

from voicecraft.core.exceptions import ValidationError

ALLOWED_EXTENSION = ".txt"
MAX_FILE_SIZE = 5 * 1024 * 1024

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 8


def validate_text_file(
    filename: str | None,
    size_bytes: int,
    max_size: int = MAX_FILE_SIZE,
    allowed_extension: str = ALLOWED_EXTENSION,
) -> None:
    """
    Validate a narration script by name and size.

    Args:
        filename: Original filename from user
        size_bytes: File size in bytes
        max_size: Byte ceiling
        allowed_extension: Single accepted extension, with dot

    Raises:
        ValidationError: Missing file, wrong type, or too large
    """
    if not filename:
        raise ValidationError("Please upload a text file.", field="file")

    if "/" in filename or "\\" in filename or ".." in filename:
        raise ValidationError("Invalid filename.", field="file")

    if not filename.lower().endswith(allowed_extension):
        raise ValidationError(f"Please select a {allowed_extension} file.", field="file")

    if size_bytes > max_size:
        max_size_mb = max_size / (1024 * 1024)
        raise ValidationError(
            f"File size exceeds {max_size_mb:g}MB limit.",
            field="file",
            details={"size_bytes": size_bytes},
        )


def validate_selections(
    category: str | None,
    audio: str | None,
    voice: str | None,
    has_file: bool = True,
) -> None:
    """
    Check that every mandatory selection was made.

    All problems are reported together in one message.

    Raises:
        ValidationError: One or more selections missing
    """
    errors: list[str] = []
    fields: list[str] = []

    if not category:
        errors.append("Please select a content category.")
        fields.append("category")
    if not audio:
        errors.append("Please select background audio.")
        fields.append("audio")
    if not voice:
        errors.append("Please select a voice.")
        fields.append("voice")
    if not has_file:
        errors.append("Please upload a text file.")
        fields.append("file")

    if errors:
        raise ValidationError(" ".join(errors), details={"fields": fields})


def build_object_key(
    user_id: str,
    job_id: str,
    voice: str,
    category: str,
    audio: str,
    filename: str,
) -> str:
    """
    Build the storage key for a submission.

    Format: {user_id}/{job_id}/{voice}/{category}/{audio}/{filename}

    The job processor splits this key to recover the job metadata, so the
    segment order is fixed.

    Raises:
        ValidationError: A segment is empty or contains a slash
    """
    segments = [user_id, job_id, voice, category, audio, filename]
    for segment in segments:
        if not segment or "/" in segment:
            raise ValidationError(
                "Invalid object key segment",
                details={"segment": segment},
            )
    return "/".join(segments)


def format_file_size(size_bytes: int) -> str:
    """Format a byte count as e.g. '1.5 KB'."""
    if size_bytes <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB"]
    index = 0
    while index < len(units) - 1 and size_bytes >= 1024 ** (index + 1):
        index += 1
    value = round(size_bytes / (1024 ** index), 2)
    return f"{value:g} {units[index]}"


def validate_sign_up(
    name: str,
    email: str,
    password: str,
    confirm: str,
    terms_accepted: bool,
) -> None:
    """
    Validate the registration form.

    Raises:
        ValidationError: details["errors"] maps field to message
    """
    errors: dict[str, str] = {}
    if not name.strip():
        errors["name"] = "Please enter your full name."
    if not email or not EMAIL_PATTERN.match(email.strip()):
        errors["email"] = "Please enter a valid email address."
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
    if password != confirm:
        errors["password_confirm"] = "Passwords do not match."
    if not terms_accepted:
        errors["terms"] = "You must agree to the terms to continue."

    if errors:
        raise ValidationError(" ".join(errors.values()), details={"errors": errors})
