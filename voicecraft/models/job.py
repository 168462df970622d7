"""
Job domain models and schemas.

Wire shapes returned by the narration jobs REST API.

Dependencies: pydantic
System role: Job status API contracts
"""

import enum
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class JobStatus(str, enum.Enum):
    """
    Narration job states, owned by the backend.

    PENDING: Script uploaded, awaiting the job processor
    PROCESSING: Speech synthesis and audio mixing in progress
    COMPLETE: Narration ready; output_key points at the MP3
    FAILED: Processing failed; error_message explains why
    """

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETE = "COMPLETE"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        """True for states no further transition leaves."""
        return self in (JobStatus.COMPLETE, JobStatus.FAILED)


class JobMeta(BaseModel):
    """Selections made at submission time, echoed back for display."""

    model_config = ConfigDict(extra="ignore")

    voice: str | None = None
    category: str | None = None
    audio: str | None = None


class Job(JobMeta):
    """A narration job as reported by GET /jobs/{jobId} and GET /jobs."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    job_id: str | None = Field(default=None, alias="jobId")
    user_id: str | None = Field(default=None, alias="userId")
    status: JobStatus
    output_key: str | None = Field(default=None, alias="outputKey")
    error_message: str | None = Field(default=None, alias="errorMessage")
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @property
    def is_downloadable(self) -> bool:
        """A download is offered only for complete jobs with an artifact key."""
        return self.status == JobStatus.COMPLETE and bool(self.output_key)


class DownloadUrl(BaseModel):
    """Response of GET /download-url."""

    url: str | None = None
