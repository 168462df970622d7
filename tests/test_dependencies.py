"""
Test suite for dependency injection container.

Tests factory functions for service creation and the shared tab context
held by the service cache.

System role: Verification of DI container
"""

import pytest

from voicecraft.api.deps import (
    get_auth_service,
    get_job_list_service,
    get_jobs_page,
    get_session_store,
    get_settings_dependency,
    get_upload_service,
)
from voicecraft.api.deps.dependencies import get_service_cache
from voicecraft.application.jobs_page import JobsPage
from voicecraft.application.services import AuthService, JobListService, UploadService
from voicecraft.configs import Settings


@pytest.fixture(autouse=True)
def fresh_cache():
    """Reset the global cache around each test."""
    get_service_cache().clear()
    yield
    get_service_cache().clear()


class TestServiceFactories:
    """Test suite for service factory functions."""

    def test_get_auth_service_should_share_session(self) -> None:
        """Test AuthService is bound to the cached session store."""
        # Act
        service = get_auth_service()

        # Assert
        assert isinstance(service, AuthService)
        assert service.session is get_session_store()

    def test_get_upload_service_should_use_storage_settings(self) -> None:
        service = get_upload_service()

        assert isinstance(service, UploadService)
        assert service.settings.max_file_size == 5 * 1024 * 1024
        assert service.session is get_session_store()

    def test_get_settings_dependency_should_return_settings(self) -> None:
        assert isinstance(get_settings_dependency(), Settings)


class TestTabContext:
    """Test suite for the single cached tab context."""

    def test_jobs_page_is_cached(self) -> None:
        """Test one jobs page (and so one poller) per application."""
        first = get_jobs_page()
        second = get_jobs_page()

        assert isinstance(first, JobsPage)
        assert first is second
        assert first.poller is second.poller

    def test_jobs_page_shares_list_service_and_session(self) -> None:
        page = get_jobs_page()

        assert isinstance(get_job_list_service(), JobListService)
        assert page.list_service is get_job_list_service()
        assert page.session is get_session_store()

    @pytest.mark.asyncio
    async def test_aclose_stops_page(self) -> None:
        cache = get_service_cache()
        page = cache.jobs_page

        await cache.aclose()

        assert not page.is_open
        assert not page.poller.is_polling

    @pytest.mark.asyncio
    async def test_auth_service_session_end_closes_cached_page(self) -> None:
        """Test ending the session through AuthService tears down the cached jobs page."""
        cache = get_service_cache()
        page = cache.jobs_page
        page.current_job.visible = True
        service = get_auth_service()

        await service.on_signed_out()

        assert not page.current_job.visible
        assert not page.poller.is_polling

    @pytest.mark.asyncio
    async def test_close_jobs_page_without_page_builds_nothing(self) -> None:
        cache = get_service_cache()

        await cache.close_jobs_page()

        assert cache._jobs_page is None
