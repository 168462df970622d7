"""
Jobs REST API client.

Async client for the narration jobs API. Every call carries the caller's
Cognito ID token in the Authorization header, which the API Gateway
Cognito authorizer reads as-is.

Transport failures become TransientNetworkError, non-OK statuses become
JobsApiError (JobNotFoundError for 404 on single-job calls), and bodies
that do not match the job shape become MalformedResponseError.

Dependencies: httpx, pydantic
System role: REST boundary for job status, listing, deletion and download links
"""

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from voicecraft.core.error_catalog import status_message
from voicecraft.core.exceptions import (
    JobNotFoundError,
    JobsApiError,
    MalformedResponseError,
    TransientNetworkError,
)
from voicecraft.models.job import DownloadUrl, Job
from voicecraft.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

_JOB_LIST = TypeAdapter(list[Job])


class JobsApiClient:
    """Client for GET/DELETE /jobs and GET /download-url."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the jobs API client.

        Args:
            base_url: API base URL, e.g. https://abc.execute-api.eu-west-2.amazonaws.com/prod
            timeout: Per-request timeout in seconds
            transport: Optional transport override (tests use httpx.MockTransport)
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        token: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        try:
            return await self._client.request(
                method,
                path,
                params=params,
                headers={"Authorization": token},
            )
        except httpx.TransportError as e:
            log_with_context(
                logger,
                logging.WARNING,
                "Jobs API request failed in transport",
                method=method,
                path=path,
                error=e,
            )
            raise TransientNetworkError(
                f"{method} {path} failed: {type(e).__name__}",
                details={"path": path},
            ) from e

    @staticmethod
    def _ensure_ok(response: httpx.Response) -> None:
        if not response.is_success:
            raise JobsApiError(
                f"API {response.status_code}",
                status_code=response.status_code,
                details={
                    "path": response.request.url.path,
                    "reason": status_message(response.status_code),
                },
            )

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(
                "Response body is not valid JSON",
                details={"path": response.request.url.path},
            ) from e

    async def get_job(self, job_id: str, token: str) -> Job:
        """
        Fetch one job.

        Args:
            job_id: Job identifier
            token: Cognito ID token

        Returns:
            Job: Current job state

        Raises:
            JobNotFoundError: API answered 404
            JobsApiError: Any other non-OK status
            TransientNetworkError: Request did not complete
            MalformedResponseError: Body is not a job
        """
        response = await self._request("GET", f"/jobs/{job_id}", token)
        if response.status_code == 404:
            raise JobNotFoundError(job_id)
        self._ensure_ok(response)

        data = self._json(response)
        try:
            job = Job.model_validate(data)
        except PydanticValidationError as e:
            raise MalformedResponseError(
                "Job response does not match the expected shape",
                details={"job_id": job_id, "errors": e.error_count()},
            ) from e

        if job.job_id is None:
            job.job_id = job_id
        return job

    async def list_jobs(self, user_id: str, token: str) -> list[Job]:
        """
        Fetch every job belonging to a user, in API order.

        Raises:
            JobsApiError: Non-OK status
            TransientNetworkError: Request did not complete
            MalformedResponseError: Body is not a list of jobs
        """
        response = await self._request("GET", "/jobs", token, params={"userId": user_id})
        self._ensure_ok(response)

        data = self._json(response)
        if not data:
            return []
        try:
            return _JOB_LIST.validate_python(data)
        except PydanticValidationError as e:
            raise MalformedResponseError(
                "Job list response does not match the expected shape",
                details={"user_id": user_id, "errors": e.error_count()},
            ) from e

    async def delete_job(self, job_id: str, token: str) -> None:
        """
        Delete a job.

        Raises:
            JobsApiError: Non-OK status (including 404)
            TransientNetworkError: Request did not complete
        """
        response = await self._request("DELETE", f"/jobs/{job_id}", token)
        self._ensure_ok(response)
        logger.info("Job deleted", extra={"job_id": job_id})

    async def get_download_url(self, output_key: str, token: str) -> str | None:
        """
        Mint a time-limited download link for a finished narration.

        Returns:
            str | None: Pre-signed URL, or None if the API returned none
        """
        response = await self._request(
            "GET", "/download-url", token, params={"key": output_key}
        )
        self._ensure_ok(response)

        data = self._json(response)
        try:
            return DownloadUrl.model_validate(data).url
        except PydanticValidationError as e:
            raise MalformedResponseError(
                "Download URL response does not match the expected shape",
                details={"output_key": output_key},
            ) from e
