"""
Job status poller.

Observes one current job from submission to a terminal state. Polls
immediately on start, then at a fixed interval, and settles exactly
once: after COMPLETE, FAILED or a 404 no further poll produces a side
effect for that job.

State machine:
    Idle -> Polling(job_id)                 start()
    Polling -> Polling                      PENDING / PROCESSING
    Polling -> Settled(job_id, COMPLETED)   COMPLETE
    Polling -> Settled(job_id, FAILED)      FAILED
    Polling -> Settled(job_id, NOT_FOUND)   404 from the API
    Polling -> Idle                         stop()
    Settled -> Idle                         reset()

Transport failures, non-OK statuses other than 404 and malformed bodies
are logged and ignored; the next tick polls again. There is no retry cap
and no backoff unless max_duration is set.

Dependencies: asyncio, voicecraft.core.exceptions
System role: Job status state machine
"""

import asyncio
import enum
import logging
from collections.abc import Awaitable, Callable
from contextlib import suppress
from dataclasses import dataclass

from voicecraft.core.exceptions import (
    JobNotFoundError,
    JobsApiError,
    MalformedResponseError,
    TransientNetworkError,
)
from voicecraft.models.job import Job, JobStatus
from voicecraft.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 4.0


class PollPhase(str, enum.Enum):
    """Poller lifecycle phases."""

    IDLE = "idle"
    POLLING = "polling"
    SETTLED = "settled"


class PollOutcome(str, enum.Enum):
    """How a settled job ended."""

    COMPLETED = "completed"
    FAILED = "failed"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class PollerState:
    """Immutable snapshot of the poller state."""

    phase: PollPhase = PollPhase.IDLE
    job_id: str | None = None
    outcome: PollOutcome | None = None


class JobPollListener:
    """
    Receiver of poller side effects.

    Subclasses override what they need; defaults do nothing. Terminal
    callbacks are invoked at most once per job ID.
    """

    async def on_update(self, job_id: str, job: Job) -> None:
        """Non-terminal status received."""

    async def on_completed(self, job_id: str, job: Job) -> None:
        """Job reached COMPLETE."""

    async def on_failed(self, job_id: str, job: Job) -> None:
        """Job reached FAILED."""

    async def on_not_found(self, job_id: str) -> None:
        """Job is absent server-side."""


FetchJob = Callable[[str], Awaitable[Job]]


class JobPoller:
    """Polls one job at a time and owns the only polling task."""

    def __init__(
        self,
        fetch_job: FetchJob,
        listener: JobPollListener,
        interval: float = DEFAULT_POLL_INTERVAL,
        max_duration: float | None = None,
    ) -> None:
        """
        Initialize the poller.

        Args:
            fetch_job: Coroutine returning the job, raising JobNotFoundError on 404
            listener: Receiver of update and terminal callbacks
            interval: Seconds between polls after the immediate first one
            max_duration: Stop polling after this many seconds (None never gives up)
        """
        self._fetch_job = fetch_job
        self._listener = listener
        self._interval = interval
        self._max_duration = max_duration
        self._state = PollerState()
        self._task: asyncio.Task | None = None

    @property
    def state(self) -> PollerState:
        return self._state

    @property
    def is_polling(self) -> bool:
        return self._state.phase == PollPhase.POLLING

    async def start(self, job_id: str) -> None:
        """
        Begin polling a job, replacing any job already being polled.

        The first poll runs as soon as the event loop schedules the task,
        without waiting for an interval.
        """
        await self.stop()
        self._state = PollerState(PollPhase.POLLING, job_id)
        self._task = asyncio.create_task(self._run(job_id), name=f"poll-job-{job_id}")
        logger.info("Started polling job", extra={"job_id": job_id})

    async def stop(self) -> None:
        """Cancel the polling task. Safe to call repeatedly."""
        task, self._task = self._task, None
        if self._state.phase == PollPhase.POLLING:
            self._state = PollerState()

        if task is None or task.done() or task is asyncio.current_task():
            return
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task

    async def reset(self) -> None:
        """Stop polling and forget any settled job."""
        await self.stop()
        self._state = PollerState()

    async def wait(self) -> None:
        """Wait until the current polling task finishes."""
        if self._task is not None:
            with suppress(asyncio.CancelledError):
                await self._task

    async def _run(self, job_id: str) -> None:
        loop = asyncio.get_running_loop()
        started = loop.time()

        while True:
            if await self.poll_once(job_id):
                return

            if (
                self._max_duration is not None
                and loop.time() - started >= self._max_duration
            ):
                logger.warning(
                    "Giving up on job after max poll duration",
                    extra={"job_id": job_id, "max_duration": self._max_duration},
                )
                self._state = PollerState()
                return

            await asyncio.sleep(self._interval)

    async def poll_once(self, job_id: str) -> bool:
        """
        Run one poll cycle.

        Args:
            job_id: Job being polled

        Returns:
            bool: True when polling for this job is over
        """
        if not self._is_polling(job_id):
            return True

        try:
            job = await self._fetch_job(job_id)
        except JobNotFoundError:
            if self._settle(job_id, PollOutcome.NOT_FOUND):
                logger.info("Current job not found, clearing", extra={"job_id": job_id})
                await self._notify(self._listener.on_not_found, job_id)
            return True
        except (TransientNetworkError, MalformedResponseError, JobsApiError) as e:
            logger.warning(
                "Poll failed, will retry on next tick",
                extra={"job_id": job_id, "error_type": type(e).__name__, "error": str(e)},
            )
            return False

        # A stop() or a newer start() may have happened while awaiting
        if not self._is_polling(job_id):
            return True

        logger.info(f"Job {job_id} status: {job.status.value}", extra={"job_id": job_id})

        if job.status.is_terminal:
            if job.status == JobStatus.COMPLETE:
                outcome, callback = PollOutcome.COMPLETED, self._listener.on_completed
            else:
                outcome, callback = PollOutcome.FAILED, self._listener.on_failed
            if self._settle(job_id, outcome):
                await self._notify(callback, job_id, job)
            return True

        await self._notify(self._listener.on_update, job_id, job)
        return False

    def _is_polling(self, job_id: str) -> bool:
        return self._state.phase == PollPhase.POLLING and self._state.job_id == job_id

    def _settle(self, job_id: str, outcome: PollOutcome) -> bool:
        """Record the terminal transition; False if it already happened."""
        if not self._is_polling(job_id):
            return False
        self._state = PollerState(PollPhase.SETTLED, job_id, outcome)
        return True

    async def _notify(self, callback, *args) -> None:
        try:
            await callback(*args)
        except Exception as e:
            log_exception_with_context(
                logger,
                "Poll listener raised",
                e,
                callback=getattr(callback, "__name__", repr(callback)),
            )
