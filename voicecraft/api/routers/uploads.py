"""
Upload API endpoints.

Routes: POST /uploads

Dependencies: voicecraft.application.services.upload_service, voicecraft.application.jobs_page
System role: Narration script submission HTTP API
"""

from fastapi import APIRouter, Depends, File, Form, UploadFile

from voicecraft.api.deps import get_jobs_page, get_upload_service, require_user
from voicecraft.application.jobs_page import JobsPage
from voicecraft.application.services.upload_service import UploadService
from voicecraft.models.identity import UserClaims
from voicecraft.models.upload import SubmissionResult, UploadRequest

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.post("", response_model=SubmissionResult)
async def submit_narration(
    file: UploadFile | None = File(default=None),
    category: str | None = Form(default=None),
    audio: str | None = Form(default=None),
    voice: str | None = Form(default=None),
    claims: UserClaims = Depends(require_user),
    upload_service: UploadService = Depends(get_upload_service),
    jobs_page: JobsPage = Depends(get_jobs_page),
) -> SubmissionResult:
    """
    Submit a narration script.

    Validates the file and selections, uploads the script to S3, records
    the new job as current and starts polling it.

    At most one byte past the size limit is read, which is enough for
    the size check to reject an oversized script.

    Raises:
        HTTPException(400): Missing selection, wrong file type or too large
        HTTPException(502): Credential exchange or upload failed
    """
    content = None
    if file is not None:
        content = await file.read(upload_service.settings.max_file_size + 1)
    request = UploadRequest(
        filename=file.filename if file is not None else None,
        content=content,
        category=category,
        audio=audio,
        voice=voice,
    )
    result = await upload_service.submit(request)
    await jobs_page.track_job(result.job_id, result.meta)
    return result
