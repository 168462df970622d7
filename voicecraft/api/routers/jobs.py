"""
Job API endpoints.

Routes:
- GET /jobs - Load the jobs view (resumes polling the current job)
- GET /jobs/current - Current job progress
- GET /jobs/download-url - Mint a download link for a finished job
- DELETE /jobs/{job_id} - Delete a job

Dependencies: voicecraft.application.jobs_page, voicecraft.application.services
System role: Job status and history HTTP API
"""

from fastapi import APIRouter, Depends, Query

from voicecraft.api.deps import get_job_list_service, get_jobs_page, require_user
from voicecraft.application.jobs_page import JobsPage
from voicecraft.application.services.job_list_service import JobListService
from voicecraft.models.identity import UserClaims
from voicecraft.models.page import DownloadUrlResponse, JobsPageResponse
from voicecraft.models.views import CurrentJobView, JobListView

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("", response_model=JobsPageResponse)
async def load_jobs_page(
    claims: UserClaims = Depends(require_user),
    jobs_page: JobsPage = Depends(get_jobs_page),
) -> JobsPageResponse:
    """
    Load the jobs view.

    Equivalent to opening the page: if a current job is stored in the
    session its status is checked immediately and then every poll
    interval until it settles. The job history is fetched fresh.
    """
    await jobs_page.open(claims.sub)
    return JobsPageResponse(current_job=jobs_page.current_job, job_list=jobs_page.job_list)


@router.get("/current", response_model=CurrentJobView)
async def current_job(
    claims: UserClaims = Depends(require_user),
    jobs_page: JobsPage = Depends(get_jobs_page),
) -> CurrentJobView:
    """Current job section as last updated by the poller."""
    return jobs_page.current_job


@router.get("/download-url", response_model=DownloadUrlResponse)
async def download_url(
    key: str = Query(description="Output key of a complete job"),
    claims: UserClaims = Depends(require_user),
    list_service: JobListService = Depends(get_job_list_service),
) -> DownloadUrlResponse:
    """Mint a 15-minute download link right before it is opened."""
    url = await list_service.resolve_download_url(key)
    return DownloadUrlResponse(url=url)


@router.delete("/{job_id}", response_model=JobListView)
async def delete_job(
    job_id: str,
    claims: UserClaims = Depends(require_user),
    list_service: JobListService = Depends(get_job_list_service),
) -> JobListView:
    """Delete a job and return the updated list (empty state when none remain)."""
    return await list_service.delete(job_id)
