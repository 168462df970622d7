"""
Shared test fixtures and configuration for entire test suite.

Provides: session store fixtures, ID token factory, job factory, poll listener recorder
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

import base64
import json
import time
import uuid
from datetime import datetime

import pytest

from voicecraft.core.job_poller import JobPollListener
from voicecraft.core.session_store import SessionStore
from voicecraft.models.identity import TokenSet, UserClaims
from voicecraft.models.job import Job


def _b64url(data: dict) -> str:
    raw = json.dumps(data).encode()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def build_id_token(**claims) -> str:
    """Unsigned JWT carrying the given claims (signature is never checked client-side)."""
    payload = {
        "sub": "user-123",
        "email": "ada@example.com",
        "name": "ada",
        "exp": int(time.time()) + 3600,
    }
    payload.update(claims)
    return f"{_b64url({'alg': 'none'})}.{_b64url(payload)}.sig"


@pytest.fixture
def make_id_token():
    """Factory for ID tokens with overridable claims."""
    return build_id_token


@pytest.fixture
def session_store() -> SessionStore:
    """Empty tab session."""
    return SessionStore()


@pytest.fixture
def signed_in_session(session_store: SessionStore) -> SessionStore:
    """Tab session with a signed-in user."""
    token = build_id_token()
    claims = UserClaims(sub="user-123", email="ada@example.com", name="ada")
    session_store.store_identity(claims, TokenSet(id_token=token, access_token="access-abc"))
    return session_store


@pytest.fixture
def make_job():
    """Factory for Job models with camelCase wire fields."""

    def _make(status: str = "PENDING", **fields) -> Job:
        data = {"jobId": fields.pop("jobId", str(uuid.uuid4())), "status": status}
        data.update(fields)
        return Job.model_validate(data)

    return _make


class RecordingListener(JobPollListener):
    """Poll listener that records every callback."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, Job | None]] = []

    async def on_update(self, job_id: str, job: Job) -> None:
        self.calls.append(("update", job_id, job))

    async def on_completed(self, job_id: str, job: Job) -> None:
        self.calls.append(("completed", job_id, job))

    async def on_failed(self, job_id: str, job: Job) -> None:
        self.calls.append(("failed", job_id, job))

    async def on_not_found(self, job_id: str) -> None:
        self.calls.append(("not_found", job_id, None))

    def names(self) -> list[str]:
        return [name for name, _, _ in self.calls]

    def terminal_calls(self) -> list[str]:
        return [name for name in self.names() if name != "update"]


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def job_id() -> str:
    """Generate a test job ID."""
    return str(uuid.uuid4())


@pytest.fixture
def fixed_times() -> tuple[datetime, datetime, datetime]:
    """T1 < T2 < T3."""
    return (
        datetime(2025, 1, 1, 9, 0, 0),
        datetime(2025, 1, 2, 9, 0, 0),
        datetime(2025, 1, 3, 9, 0, 0),
    )
