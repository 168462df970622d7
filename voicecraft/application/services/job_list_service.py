"""
Job list service.

Loads a user's job history into a display model, deletes jobs with an
optimistic pending state, and mints download links on demand.

Dependencies: voicecraft.boundary.http, voicecraft.core.rendering
System role: Job history orchestration
"""

import logging

from voicecraft.boundary.http.jobs_api_client import JobsApiClient
from voicecraft.core.exceptions import (
    DeleteError,
    DownloadLinkError,
    JobsApiError,
    MalformedResponseError,
    TransientNetworkError,
)
from voicecraft.core.rendering import build_job_card, sort_jobs
from voicecraft.core.session_store import SessionStore
from voicecraft.models.views import JobListView, ListState

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load jobs. Please refresh the page."
DELETE_FAILED_MESSAGE = "Failed to delete job. Please try again."
DOWNLOAD_FAILED_MESSAGE = "Could not generate download link. Please try again."


class JobListService:
    """Owns the job history view for one tab."""

    def __init__(self, api_client: JobsApiClient, session: SessionStore) -> None:
        self.api_client = api_client
        self.session = session
        self.view = JobListView()

    @property
    def _token(self) -> str:
        return self.session.id_token or ""

    async def load(self, user_id: str) -> JobListView:
        """
        Fetch and render every job of a user, newest first.

        Failures are reported through the view state, never raised.
        """
        self.view = JobListView(state=ListState.LOADING)
        try:
            jobs = await self.api_client.list_jobs(user_id, self._token)
        except (JobsApiError, TransientNetworkError, MalformedResponseError) as e:
            logger.error(
                "Failed to load jobs",
                extra={"user_id": user_id, "error_type": type(e).__name__, "error": str(e)},
            )
            self.view = JobListView(state=ListState.ERROR, error=LOAD_FAILED_MESSAGE)
            return self.view

        if not jobs:
            self.view = JobListView(state=ListState.EMPTY)
            return self.view

        cards = [build_job_card(job) for job in sort_jobs(jobs)]
        self.view = JobListView(state=ListState.POPULATED, cards=cards)
        return self.view

    async def delete(self, job_id: str) -> JobListView:
        """
        Delete a job.

        The card is marked pending before the request, removed on success,
        and restored on failure. Removing the last card switches the view
        to the empty state.

        Raises:
            DeleteError: The API did not confirm the deletion
        """
        card = next((c for c in self.view.cards if c.job_id == job_id), None)
        if card is not None:
            card.pending_delete = True

        try:
            await self.api_client.delete_job(job_id, self._token)
        except (JobsApiError, TransientNetworkError) as e:
            logger.error("Delete error", extra={"job_id": job_id, "error": str(e)})
            if card is not None:
                card.pending_delete = False
            raise DeleteError(DELETE_FAILED_MESSAGE, details={"job_id": job_id}) from e

        self.view.cards = [c for c in self.view.cards if c.job_id != job_id]
        if not self.view.cards and self.view.state == ListState.POPULATED:
            self.view.state = ListState.EMPTY
        return self.view

    async def resolve_download_url(self, output_key: str) -> str:
        """
        Mint a download link right before it is used.

        Raises:
            DownloadLinkError: No link could be produced
        """
        try:
            url = await self.api_client.get_download_url(output_key, self._token)
        except (JobsApiError, TransientNetworkError, MalformedResponseError) as e:
            logger.error("Download error", extra={"output_key": output_key, "error": str(e)})
            raise DownloadLinkError(DOWNLOAD_FAILED_MESSAGE) from e

        if not url:
            raise DownloadLinkError(DOWNLOAD_FAILED_MESSAGE)
        return url
