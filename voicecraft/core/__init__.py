"""
Core front-end logic module.

Contains the exception hierarchy, tab session state, upload validation,
job rendering and the job status poller.
"""

from voicecraft.core.exceptions import (
    AuthenticationError,
    DeleteError,
    DownloadLinkError,
    JobNotFoundError,
    JobsApiError,
    MalformedResponseError,
    NotSignedInError,
    TransientNetworkError,
    UploadError,
    ValidationError,
    VoiceCraftException,
)
from voicecraft.core.job_poller import JobPoller, JobPollListener, PollOutcome, PollPhase
from voicecraft.core.session_store import SessionStore

__all__ = [
    # Exceptions
    "VoiceCraftException",
    "ValidationError",
    "AuthenticationError",
    "NotSignedInError",
    "JobsApiError",
    "JobNotFoundError",
    "TransientNetworkError",
    "MalformedResponseError",
    "UploadError",
    "DeleteError",
    "DownloadLinkError",
    # Front-end logic
    "JobPoller",
    "JobPollListener",
    "PollOutcome",
    "PollPhase",
    "SessionStore",
]
