"""
Upload submitter.

Validates a narration script and the form selections, then writes the
script to S3 under a key that encodes the job metadata. A successful
write is what creates the job server-side; there is no create-job call.

Dependencies: voicecraft.boundary.aws, voicecraft.core
System role: Job submission orchestration
"""

import logging
import uuid

from voicecraft.boundary.aws.cognito_client import CognitoIdentityClient
from voicecraft.boundary.aws.s3_client import S3UploadClient
from voicecraft.configs.storage import StorageSettings
from voicecraft.core.exceptions import (
    AuthenticationError,
    NotSignedInError,
    UploadError,
)
from voicecraft.core.session_store import SessionStore
from voicecraft.core.upload_validation import (
    build_object_key,
    format_file_size,
    validate_selections,
    validate_text_file,
)
from voicecraft.models.job import JobMeta
from voicecraft.models.upload import SubmissionResult, UploadRequest

logger = logging.getLogger(__name__)


class UploadService:
    """
    Upload submitter.

    Nothing is persisted unless the storage write succeeds, so a failed
    submission can simply be retried with the same form.
    """

    def __init__(
        self,
        identity_client: CognitoIdentityClient,
        s3_client: S3UploadClient,
        session: SessionStore,
        settings: StorageSettings,
    ) -> None:
        """
        Initialize upload service.

        Args:
            identity_client: Source of scoped storage credentials
            s3_client: Uploads bucket client
            session: Tab session state
            settings: File constraints and content type
        """
        self.identity_client = identity_client
        self.s3_client = s3_client
        self.session = session
        self.settings = settings

    def validate(self, request: UploadRequest) -> None:
        """
        Run every local check.

        Raises:
            ValidationError: Missing selection, wrong file type, or file too large
        """
        validate_selections(
            request.category,
            request.audio,
            request.voice,
            has_file=request.filename is not None and request.content is not None,
        )
        validate_text_file(
            request.filename,
            request.size,
            max_size=self.settings.max_file_size,
            allowed_extension=self.settings.allowed_extension,
        )

    async def submit(self, request: UploadRequest) -> SubmissionResult:
        """
        Validate and upload a script, then record it as the current job.

        Args:
            request: Script bytes and selections

        Returns:
            SubmissionResult: New job ID, object key and metadata

        Raises:
            ValidationError: Local validation failed (no network call made)
            NotSignedInError: No identity in the session
            UploadError: Credential exchange or storage write failed
        """
        self.validate(request)

        user_id = self.session.user_id
        id_token = self.session.id_token
        if not user_id or not id_token:
            raise NotSignedInError()

        job_id = str(uuid.uuid4())
        meta = JobMeta(voice=request.voice, category=request.category, audio=request.audio)
        key = build_object_key(
            user_id,
            job_id,
            request.voice,
            request.category,
            request.audio,
            request.filename,
        )

        logger.info(
            "Submitting narration job",
            extra={"job_id": job_id, "file_name": request.filename, "size_bytes": request.size},
        )

        try:
            credentials = await self.identity_client.get_storage_credentials(id_token)
        except AuthenticationError as e:
            logger.warning(
                "Could not obtain storage credentials",
                extra={"job_id": job_id, "error": str(e)},
            )
            raise UploadError(
                "Could not authorise the upload. Please sign in again.",
                details={"job_id": job_id, "code": e.code},
            ) from e

        await self.s3_client.upload_text(
            key,
            request.content,
            credentials,
            content_type=self.settings.content_type,
        )

        self.session.set_current_job(job_id, meta)
        logger.info("Narration job submitted", extra={"job_id": job_id, "s3_key": key})

        return SubmissionResult(
            job_id=job_id,
            object_key=key,
            meta=meta,
            file_name=request.filename,
            size_label=format_file_size(request.size),
        )
