"""
Page response schemas.

Dependencies: pydantic
System role: Jobs page API contracts
"""

from pydantic import BaseModel

from voicecraft.models.views import CurrentJobView, JobListView


class JobsPageResponse(BaseModel):
    """Everything the jobs view renders on load."""

    current_job: CurrentJobView
    job_list: JobListView


class DownloadUrlResponse(BaseModel):
    url: str
