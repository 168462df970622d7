"""Service orchestrators."""

from .auth_service import AuthService
from .job_list_service import JobListService
from .upload_service import UploadService

__all__ = [
    "AuthService",
    "JobListService",
    "UploadService",
]
