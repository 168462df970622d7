"""
Test suite for JobsApiClient.

Uses httpx.MockTransport so no request leaves the process.

System role: Verification of the jobs REST boundary
"""

import json

import httpx
import pytest

from voicecraft.boundary.http.jobs_api_client import JobsApiClient
from voicecraft.core.exceptions import (
    JobNotFoundError,
    JobsApiError,
    MalformedResponseError,
    TransientNetworkError,
)
from voicecraft.models.job import JobStatus

BASE_URL = "https://api.example.com/prod"
TOKEN = "id-token-abc"


def _client(handler) -> JobsApiClient:
    return JobsApiClient(BASE_URL, transport=httpx.MockTransport(handler))


class TestGetJob:
    """Test suite for GET /jobs/{jobId}."""

    @pytest.mark.asyncio
    async def test_sends_raw_token_and_parses_job(self):
        """Test the Authorization header carries the bare ID token."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            seen["path"] = request.url.path
            return httpx.Response(
                200,
                json={"jobId": "j1", "status": "COMPLETE", "outputKey": "k1", "voice": "Amy"},
            )

        client = _client(handler)
        job = await client.get_job("j1", TOKEN)
        await client.aclose()

        assert seen == {"auth": TOKEN, "path": "/prod/jobs/j1"}
        assert job.status == JobStatus.COMPLETE
        assert job.output_key == "k1"
        assert job.voice == "Amy"

    @pytest.mark.asyncio
    async def test_fills_missing_job_id(self):
        client = _client(lambda request: httpx.Response(200, json={"status": "PENDING"}))

        job = await client.get_job("j9", TOKEN)

        assert job.job_id == "j9"

    @pytest.mark.asyncio
    async def test_404_raises_not_found(self):
        client = _client(lambda request: httpx.Response(404, json={"message": "missing"}))

        with pytest.raises(JobNotFoundError) as exc_info:
            await client.get_job("j1", TOKEN)

        assert exc_info.value.job_id == "j1"

    @pytest.mark.asyncio
    async def test_500_raises_api_error(self):
        client = _client(lambda request: httpx.Response(500))

        with pytest.raises(JobsApiError) as exc_info:
            await client.get_job("j1", TOKEN)

        assert not isinstance(exc_info.value, JobNotFoundError)
        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "API 500"
        assert exc_info.value.details["reason"] == "Internal server error"

    @pytest.mark.asyncio
    async def test_connect_error_is_transient(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        client = _client(handler)

        with pytest.raises(TransientNetworkError):
            await client.get_job("j1", TOKEN)

    @pytest.mark.asyncio
    async def test_invalid_json_is_malformed(self):
        client = _client(lambda request: httpx.Response(200, content=b"<html>"))

        with pytest.raises(MalformedResponseError):
            await client.get_job("j1", TOKEN)

    @pytest.mark.asyncio
    async def test_unknown_status_is_malformed(self):
        client = _client(lambda request: httpx.Response(200, json={"jobId": "j1", "status": "ARCHIVED"}))

        with pytest.raises(MalformedResponseError):
            await client.get_job("j1", TOKEN)


class TestListJobs:
    """Test suite for GET /jobs?userId=."""

    @pytest.mark.asyncio
    async def test_passes_user_id_and_parses_list(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["user_id"] = request.url.params.get("userId")
            body = [
                {"jobId": "a", "status": "PENDING", "createdAt": "2025-01-01T09:00:00Z"},
                {"jobId": "b", "status": "FAILED", "errorMessage": "boom"},
            ]
            return httpx.Response(200, content=json.dumps(body))

        client = _client(handler)
        jobs = await client.list_jobs("user-1", TOKEN)

        assert seen["user_id"] == "user-1"
        assert [job.job_id for job in jobs] == ["a", "b"]
        assert jobs[0].created_at is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [b"[]", b"null"])
    async def test_empty_body_is_empty_list(self, body):
        client = _client(lambda request: httpx.Response(200, content=body))

        assert await client.list_jobs("user-1", TOKEN) == []

    @pytest.mark.asyncio
    async def test_non_ok_raises(self):
        client = _client(lambda request: httpx.Response(403))

        with pytest.raises(JobsApiError) as exc_info:
            await client.list_jobs("user-1", TOKEN)

        assert exc_info.value.details["reason"] == "Access forbidden"


class TestDeleteAndDownload:
    """Test suite for DELETE /jobs/{jobId} and GET /download-url."""

    @pytest.mark.asyncio
    async def test_delete_uses_delete_method(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            return httpx.Response(204)

        client = _client(handler)
        await client.delete_job("j1", TOKEN)

        assert seen == {"method": "DELETE", "path": "/prod/jobs/j1"}

    @pytest.mark.asyncio
    async def test_delete_404_is_api_error(self):
        client = _client(lambda request: httpx.Response(404))

        with pytest.raises(JobsApiError):
            await client.delete_job("j1", TOKEN)

    @pytest.mark.asyncio
    async def test_download_url(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["key"] = request.url.params.get("key")
            return httpx.Response(200, json={"url": "https://signed.example.com/k1"})

        client = _client(handler)

        assert await client.get_download_url("out/k1.mp3", TOKEN) == "https://signed.example.com/k1"
        assert seen["key"] == "out/k1.mp3"

    @pytest.mark.asyncio
    async def test_download_url_missing(self):
        client = _client(lambda request: httpx.Response(200, json={}))

        assert await client.get_download_url("k1", TOKEN) is None
