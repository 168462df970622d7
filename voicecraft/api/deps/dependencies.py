"""
Dependency injection container.

Factory functions for FastAPI dependencies. The cache holds the single
tab context this front end serves: one session store, one jobs page and
the clients they share.

Dependencies: voicecraft.configs, voicecraft.application, voicecraft.boundary
System role: DI container for service injection
"""

import logging
from functools import lru_cache

from fastapi import Depends

from voicecraft.application.jobs_page import JobsPage
from voicecraft.application.services import AuthService, JobListService, UploadService
from voicecraft.boundary.aws import CognitoIdentityClient, S3UploadClient
from voicecraft.boundary.http import JobsApiClient
from voicecraft.configs import Settings, get_settings
from voicecraft.core.exceptions import NotSignedInError
from voicecraft.core.session_store import SessionStore
from voicecraft.models.identity import UserClaims

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._session = None
        self._jobs_api_client = None
        self._identity_client = None
        self._s3_client = None
        self._job_list_service = None
        self._jobs_page = None

    @property
    def session(self) -> SessionStore:
        """Get the tab session store."""
        if self._session is None:
            self._session = SessionStore()
        return self._session

    @property
    def jobs_api_client(self) -> JobsApiClient:
        """Get cached jobs REST client."""
        if self._jobs_api_client is None:
            settings = get_settings()
            self._jobs_api_client = JobsApiClient(
                base_url=settings.jobs_api.base_url,
                timeout=settings.jobs_api.timeout_seconds,
            )
        return self._jobs_api_client

    @property
    def identity_client(self) -> CognitoIdentityClient:
        """Get cached Cognito client."""
        if self._identity_client is None:
            self._identity_client = CognitoIdentityClient(get_settings().cognito)
        return self._identity_client

    @property
    def s3_client(self) -> S3UploadClient:
        """Get cached S3 upload client."""
        if self._s3_client is None:
            settings = get_settings()
            self._s3_client = S3UploadClient(
                bucket=settings.storage.bucket,
                region=settings.storage.region,
            )
        return self._s3_client

    @property
    def job_list_service(self) -> JobListService:
        """Get cached job list service (it owns the list view state)."""
        if self._job_list_service is None:
            self._job_list_service = JobListService(self.jobs_api_client, self.session)
        return self._job_list_service

    @property
    def jobs_page(self) -> JobsPage:
        """Get cached jobs page context (it owns the poller)."""
        if self._jobs_page is None:
            settings = get_settings()
            self._jobs_page = JobsPage(
                session=self.session,
                api_client=self.jobs_api_client,
                list_service=self.job_list_service,
                poll_interval=settings.jobs_api.poll_interval_seconds,
                max_poll_duration=settings.jobs_api.max_poll_duration_seconds,
            )
        return self._jobs_page

    async def close_jobs_page(self) -> None:
        """Stop polling and drop the jobs views, if the page was ever built."""
        if self._jobs_page is not None:
            await self._jobs_page.close()

    async def aclose(self) -> None:
        """Stop polling and close network clients."""
        await self.close_jobs_page()
        if self._jobs_api_client is not None:
            await self._jobs_api_client.aclose()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._session = None
        self._jobs_api_client = None
        self._identity_client = None
        self._s3_client = None
        self._job_list_service = None
        self._jobs_page = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_session_store() -> SessionStore:
    return get_service_cache().session


def get_identity_client() -> CognitoIdentityClient:
    return get_service_cache().identity_client


def get_auth_service() -> AuthService:
    """
    Get auth service instance.

    Returns:
        AuthService: Identity flows bound to the tab session; ending the
            session also closes the jobs page
    """
    cache = get_service_cache()
    return AuthService(
        cache.identity_client,
        cache.session,
        on_signed_out=cache.close_jobs_page,
    )


def get_upload_service() -> UploadService:
    """
    Get upload service instance.

    Returns:
        UploadService: Submitter with Cognito credentials and S3 client
    """
    cache = get_service_cache()
    return UploadService(
        identity_client=cache.identity_client,
        s3_client=cache.s3_client,
        session=cache.session,
        settings=get_settings().storage,
    )


def get_job_list_service() -> JobListService:
    return get_service_cache().job_list_service


def get_jobs_page() -> JobsPage:
    return get_service_cache().jobs_page


async def require_user(auth_service: AuthService = Depends(get_auth_service)) -> UserClaims:
    """
    Resolve the signed-in user.

    Raises:
        NotSignedInError: No valid session (mapped to 401)
    """
    claims = await auth_service.restore_session()
    if claims is None:
        raise NotSignedInError("Your session has expired. Please log in again.")
    return claims
