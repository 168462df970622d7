"""
Jobs page context.

Explicit context for the jobs view of one tab: the session store, the
job list service and the poller that owns the polling task. On open it
recovers the current job from the session and polls it, and it reacts
to every poller outcome.

Dependencies: voicecraft.core.job_poller, voicecraft.application.services
System role: Current-job tracking and job list refresh
"""

import asyncio
import logging

from voicecraft.application.services.job_list_service import JobListService
from voicecraft.boundary.http.jobs_api_client import JobsApiClient
from voicecraft.core.exceptions import DownloadLinkError
from voicecraft.core.job_poller import DEFAULT_POLL_INTERVAL, JobPoller, JobPollListener
from voicecraft.core.rendering import build_current_job_view
from voicecraft.core.session_store import SessionStore
from voicecraft.models.job import Job, JobMeta
from voicecraft.models.views import CurrentJobView, JobListView

logger = logging.getLogger(__name__)


class JobsPage(JobPollListener):
    """
    Jobs view state for one tab.

    The poller is created here and only driven through open, track_job
    and close.
    """

    def __init__(
        self,
        session: SessionStore,
        api_client: JobsApiClient,
        list_service: JobListService,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        max_poll_duration: float | None = None,
    ) -> None:
        self.session = session
        self.api_client = api_client
        self.list_service = list_service
        self.current_job = CurrentJobView()
        self._poller = JobPoller(
            self._fetch_job,
            self,
            interval=poll_interval,
            max_duration=max_poll_duration,
        )
        self._opened = False

    @property
    def poller(self) -> JobPoller:
        return self._poller

    @property
    def job_list(self) -> JobListView:
        return self.list_service.view

    @property
    def is_open(self) -> bool:
        return self._opened

    async def open(self, user_id: str) -> None:
        """
        Initialise the page: resume the current job if one is stored,
        then load the full job list.
        """
        self._opened = True
        job_id = self.session.current_job_id
        if job_id:
            self.current_job = build_current_job_view(job_id, self.session.current_job_meta())
            await self._poller.start(job_id)
        else:
            self.current_job = CurrentJobView()
            await self._poller.reset()

        await self.list_service.load(user_id)

    async def track_job(self, job_id: str, meta: JobMeta) -> None:
        """Record a freshly submitted job as current and start polling it."""
        self.session.set_current_job(job_id, meta)
        self.current_job = build_current_job_view(job_id, meta)
        await self._poller.start(job_id)

    async def close(self) -> None:
        """Stop polling and drop view state; used on sign-out and shutdown."""
        await self._poller.reset()
        self.current_job = CurrentJobView()
        self.list_service.view = JobListView()
        self._opened = False

    async def _fetch_job(self, job_id: str) -> Job:
        return await self.api_client.get_job(job_id, self.session.id_token or "")

    async def on_update(self, job_id: str, job: Job) -> None:
        self.current_job = build_current_job_view(
            job_id, self.session.current_job_meta(), job, self.current_job
        )

    async def on_completed(self, job_id: str, job: Job) -> None:
        await self.on_update(job_id, job)
        tasks = [self._refresh_list()]
        if job.output_key:
            tasks.append(self._resolve_download_link(job.output_key))
        await asyncio.gather(*tasks)

    async def on_failed(self, job_id: str, job: Job) -> None:
        await self.on_update(job_id, job)
        await self._refresh_list()

    async def on_not_found(self, job_id: str) -> None:
        self.session.clear_current_job()
        self.current_job = CurrentJobView()

    async def _resolve_download_link(self, output_key: str) -> None:
        try:
            url = await self.list_service.resolve_download_url(output_key)
        except DownloadLinkError:
            logger.warning("Current job download link unavailable", extra={"output_key": output_key})
            return
        self.current_job.download_url = url

    async def _refresh_list(self) -> None:
        user_id = self.session.user_id
        if user_id:
            await self.list_service.load(user_id)
