"""
Upload request and result schemas.

Dependencies: pydantic
System role: Upload submission contracts
"""

from pydantic import BaseModel, Field

from voicecraft.models.job import JobMeta


class UploadRequest(BaseModel):
    """A narration script plus the user's selections."""

    filename: str | None = Field(default=None, description="Original filename from user")
    content: bytes | None = Field(default=None, description="Raw file bytes")
    voice: str | None = None
    category: str | None = None
    audio: str | None = None

    @property
    def size(self) -> int:
        """Size of the script in bytes."""
        return len(self.content) if self.content is not None else 0


class SubmissionResult(BaseModel):
    """Outcome of a successful submission."""

    job_id: str
    object_key: str
    meta: JobMeta
    file_name: str
    size_label: str = Field(description="Human readable script size, e.g. '1.5 KB'")
    redirect_to: str = Field(default="jobs", description="View to navigate to next")
