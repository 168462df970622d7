"""
Test suite for JobPoller.

Covers the polling state machine: immediate first poll, fixed-interval
re-polling while PENDING/PROCESSING, exactly-once terminal callbacks,
404 handling, tolerance of transient failures and cancellation.

System role: Verification of the job status state machine
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from voicecraft.core.exceptions import (
    JobNotFoundError,
    JobsApiError,
    MalformedResponseError,
    TransientNetworkError,
)
from voicecraft.core.job_poller import JobPoller, PollOutcome, PollPhase

FAST = 0.001


class TestPollerStart:
    """Test suite for starting and replacing poll targets."""

    @pytest.mark.asyncio
    async def test_first_poll_runs_without_waiting_for_interval(self, listener, make_job, job_id):
        """Test the first fetch happens immediately even with a long interval."""
        # Arrange
        fetched = asyncio.Event()

        async def fetch(jid):
            fetched.set()
            return make_job("PENDING", jobId=jid)

        poller = JobPoller(fetch, listener, interval=60)

        # Act
        await poller.start(job_id)
        await asyncio.wait_for(fetched.wait(), timeout=1.0)

        # Assert
        assert poller.is_polling
        assert poller.state.job_id == job_id
        await poller.stop()

    @pytest.mark.asyncio
    async def test_start_replaces_previous_job(self, listener, make_job):
        """Test starting a second job stops polling the first."""
        fetch = AsyncMock(side_effect=lambda jid: make_job("PENDING", jobId=jid))
        poller = JobPoller(fetch, listener, interval=60)

        await poller.start("job-a")
        await asyncio.sleep(0.01)
        await poller.start("job-b")
        await asyncio.sleep(0.01)
        await poller.stop()

        polled = [call.args[0] for call in fetch.await_args_list]
        assert polled == ["job-a", "job-b"]

    @pytest.mark.asyncio
    async def test_initial_state_is_idle(self, listener):
        """Test a fresh poller is idle."""
        poller = JobPoller(AsyncMock(), listener)

        assert poller.state.phase == PollPhase.IDLE
        assert poller.state.job_id is None
        assert not poller.is_polling


class TestPollerTerminalStates:
    """Test suite for terminal transitions."""

    @pytest.mark.asyncio
    async def test_pending_then_complete_fires_completed_once(self, listener, make_job, job_id):
        """Test PENDING keeps polling and COMPLETE settles exactly once."""
        # Arrange
        responses = [
            make_job("PENDING", jobId=job_id),
            make_job("PROCESSING", jobId=job_id),
            make_job("COMPLETE", jobId=job_id, outputKey="k1"),
        ]
        fetch = AsyncMock(side_effect=responses)
        poller = JobPoller(fetch, listener, interval=FAST)

        # Act
        await poller.start(job_id)
        await poller.wait()

        # Assert
        assert fetch.await_count == 3
        assert listener.names() == ["update", "update", "completed"]
        assert poller.state.phase == PollPhase.SETTLED
        assert poller.state.outcome == PollOutcome.COMPLETED

    @pytest.mark.asyncio
    async def test_failed_fires_failed_once(self, listener, make_job, job_id):
        """Test FAILED settles with a single on_failed callback."""
        fetch = AsyncMock(return_value=make_job("FAILED", jobId=job_id, errorMessage="boom"))
        poller = JobPoller(fetch, listener, interval=FAST)

        await poller.start(job_id)
        await poller.wait()

        assert listener.names() == ["failed"]
        assert poller.state.outcome == PollOutcome.FAILED
        assert fetch.await_count == 1

    @pytest.mark.asyncio
    async def test_not_found_settles_and_notifies(self, listener, job_id):
        """Test a 404 settles as NOT_FOUND and fires on_not_found."""
        fetch = AsyncMock(side_effect=JobNotFoundError(job_id))
        poller = JobPoller(fetch, listener, interval=FAST)

        await poller.start(job_id)
        await poller.wait()

        assert listener.calls == [("not_found", job_id, None)]
        assert poller.state.outcome == PollOutcome.NOT_FOUND
        assert not poller.is_polling

    @pytest.mark.asyncio
    async def test_repeat_poll_after_settle_has_no_effect(self, listener, make_job, job_id):
        """Test a late poll cycle after COMPLETE neither fetches nor notifies."""
        fetch = AsyncMock(return_value=make_job("COMPLETE", jobId=job_id))
        poller = JobPoller(fetch, listener, interval=FAST)
        await poller.start(job_id)
        await poller.wait()

        # Act
        done = await poller.poll_once(job_id)

        # Assert
        assert done is True
        assert fetch.await_count == 1
        assert listener.terminal_calls() == ["completed"]

    @pytest.mark.asyncio
    async def test_stop_keeps_settled_state_and_reset_clears_it(self, listener, make_job, job_id):
        """Test stop() leaves a settled outcome, reset() returns to idle."""
        fetch = AsyncMock(return_value=make_job("COMPLETE", jobId=job_id))
        poller = JobPoller(fetch, listener, interval=FAST)
        await poller.start(job_id)
        await poller.wait()

        await poller.stop()
        assert poller.state.phase == PollPhase.SETTLED

        await poller.reset()
        assert poller.state.phase == PollPhase.IDLE
        assert poller.state.outcome is None


class TestPollerFailures:
    """Test suite for non-terminal failures."""

    @pytest.mark.asyncio
    async def test_transient_failures_do_not_stop_polling(self, listener, make_job, job_id):
        """Test network, non-OK and malformed responses are retried on the next tick."""
        # Arrange
        fetch = AsyncMock(
            side_effect=[
                TransientNetworkError("connection reset"),
                JobsApiError("API 500", status_code=500),
                MalformedResponseError("not json"),
                make_job("COMPLETE", jobId=job_id),
            ]
        )
        poller = JobPoller(fetch, listener, interval=FAST)

        # Act
        await poller.start(job_id)
        await poller.wait()

        # Assert
        assert fetch.await_count == 4
        assert listener.names() == ["completed"]

    @pytest.mark.asyncio
    async def test_listener_error_does_not_break_loop(self, make_job, job_id, listener):
        """Test an exception in on_update is logged and polling continues."""
        listener.on_update = AsyncMock(side_effect=RuntimeError("render failed"))
        fetch = AsyncMock(
            side_effect=[make_job("PENDING", jobId=job_id), make_job("COMPLETE", jobId=job_id)]
        )
        poller = JobPoller(fetch, listener, interval=FAST)

        await poller.start(job_id)
        await poller.wait()

        assert listener.terminal_calls() == ["completed"]
        assert poller.state.outcome == PollOutcome.COMPLETED

    @pytest.mark.asyncio
    async def test_max_duration_gives_up(self, listener, make_job, job_id):
        """Test polling stops quietly once max_duration has elapsed."""
        fetch = AsyncMock(side_effect=lambda jid: make_job("PENDING", jobId=jid))
        poller = JobPoller(fetch, listener, interval=FAST, max_duration=0.02)

        await poller.start(job_id)
        await asyncio.wait_for(poller.wait(), timeout=1.0)

        assert poller.state.phase == PollPhase.IDLE
        assert listener.terminal_calls() == []


class TestPollerStop:
    """Test suite for cancellation."""

    @pytest.mark.asyncio
    async def test_stop_halts_fetching(self, listener, make_job, job_id):
        """Test no fetch happens after stop()."""
        fetch = AsyncMock(side_effect=lambda jid: make_job("PENDING", jobId=jid))
        poller = JobPoller(fetch, listener, interval=FAST)

        await poller.start(job_id)
        await asyncio.sleep(0.02)
        await poller.stop()
        count = fetch.await_count
        await asyncio.sleep(0.02)

        assert count >= 1
        assert fetch.await_count == count
        assert poller.state.phase == PollPhase.IDLE

    @pytest.mark.asyncio
    async def test_response_arriving_after_stop_is_ignored(self, listener, make_job, job_id):
        """Test a poll cycle whose response lands after stop() has no effect."""
        release = asyncio.Event()

        async def slow_fetch(jid):
            await release.wait()
            return make_job("COMPLETE", jobId=jid)

        poller = JobPoller(slow_fetch, listener, interval=60)
        await poller.start(job_id)
        # Drive a second in-flight cycle directly, independent of the task
        in_flight = asyncio.create_task(poller.poll_once(job_id))
        await asyncio.sleep(0)

        await poller.stop()
        release.set()
        done = await in_flight

        assert done is True
        assert listener.calls == []
        assert poller.state.phase == PollPhase.IDLE

    @pytest.mark.asyncio
    async def test_stop_is_idempotent(self, listener):
        """Test stop() on an idle poller is a no-op."""
        poller = JobPoller(AsyncMock(), listener)

        await poller.stop()
        await poller.stop()

        assert poller.state.phase == PollPhase.IDLE
