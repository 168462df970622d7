"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_auth_service,
    get_identity_client,
    get_job_list_service,
    get_jobs_page,
    get_service_cache,
    get_session_store,
    get_settings_dependency,
    get_upload_service,
    require_user,
)

__all__ = [
    "get_auth_service",
    "get_identity_client",
    "get_job_list_service",
    "get_jobs_page",
    "get_service_cache",
    "get_session_store",
    "get_settings_dependency",
    "get_upload_service",
    "require_user",
]
