"""
Job rendering.

Pure functions from job data to display models. Nothing here touches
the network or any shared state, so the list and current-job views can
be built and tested without a running front end.

Dependencies: voicecraft.models
System role: View model construction for job history and current job
"""

from datetime import datetime

from voicecraft.models.job import Job, JobMeta, JobStatus
from voicecraft.models.views import (
    CurrentJobView,
    JobAction,
    JobCardView,
    StatusBadge,
)

DEFAULT_FAILURE_MESSAGE = "Processing failed. Please try again."
LIST_FAILURE_EXCERPT = "Processing failed"

_BADGES: dict[str, tuple[str, str]] = {
    JobStatus.COMPLETE.value: ("badge-complete", "Complete"),
    JobStatus.PROCESSING.value: ("badge-processing", "Processing"),
    JobStatus.FAILED.value: ("badge-failed", "Failed"),
    JobStatus.PENDING.value: ("badge-pending", "Pending"),
}

_AUDIO_LABELS = {
    "brown-noise": "Brown Noise",
    "music": "Music",
    "calming-sounds": "Calming Sounds",
}


def capitalise(value: str | None) -> str:
    """Upper-case the first character only."""
    return value[:1].upper() + value[1:] if value else ""


def format_audio_label(audio: str | None) -> str:
    return _AUDIO_LABELS.get(audio or "", capitalise(audio))


def format_date(created_at: datetime | None) -> str:
    """Format a creation time as dd/mm/yyyy, HH:MM:SS in local time."""
    if created_at is None:
        return "Unknown date"
    if created_at.tzinfo is not None:
        created_at = created_at.astimezone()
    return created_at.strftime("%d/%m/%Y, %H:%M:%S")


def build_status_badge(status: JobStatus | str | None) -> StatusBadge:
    """Map a job status to its badge; unknown values get the pending style."""
    key = status.value if isinstance(status, JobStatus) else status
    css_class, label = _BADGES.get(key or "", ("badge-pending", key or "Unknown"))
    return StatusBadge(css_class=css_class, label=label)


def build_meta_parts(meta: JobMeta) -> list[str]:
    """Human-readable voice, category and audio labels, skipping blanks."""
    parts = []
    if meta.voice:
        parts.append(meta.voice)
    if meta.category:
        parts.append(capitalise(meta.category))
    if meta.audio:
        parts.append(format_audio_label(meta.audio))
    return parts


def _sort_key(job: Job) -> float:
    if job.created_at is None:
        return float("-inf")
    return job.created_at.timestamp()


def sort_jobs(jobs: list[Job]) -> list[Job]:
    """Most recent first; jobs without a creation time sort as earliest."""
    return sorted(jobs, key=_sort_key, reverse=True)


def build_job_card(job: Job) -> JobCardView:
    """
    Build the history card for one job.

    Download is offered only for complete jobs with an output key, the
    error excerpt only for failed jobs, and delete always.
    """
    job_id = job.job_id or ""
    actions = []
    if job.is_downloadable:
        actions.append(JobAction.DOWNLOAD)
    actions.append(JobAction.DELETE)

    error_excerpt = None
    if job.status == JobStatus.FAILED:
        error_excerpt = job.error_message or LIST_FAILURE_EXCERPT

    return JobCardView(
        job_id=job_id,
        short_id=f"{job_id[:8]}...",
        date_label=format_date(job.created_at),
        badge=build_status_badge(job.status),
        meta=build_meta_parts(job),
        actions=actions,
        output_key=job.output_key if job.is_downloadable else None,
        error_excerpt=error_excerpt,
    )


def build_current_job_view(
    job_id: str,
    meta: JobMeta,
    job: Job | None = None,
    previous: CurrentJobView | None = None,
) -> CurrentJobView:
    """
    Build the in-progress section for the current job.

    With no job yet the section shows the metadata snapshot and a
    progress bar. Pending and processing responses leave the previous
    view untouched apart from the badge. A download link already
    resolved on ``previous`` is kept.
    """
    view = CurrentJobView(
        visible=True,
        job_id=job_id,
        meta=build_meta_parts(meta),
        download_url=previous.download_url if previous else None,
    )
    if job is None:
        return view

    view.badge = build_status_badge(job.status)
    if job.status == JobStatus.COMPLETE:
        view.title = "Narration ready!"
        view.show_progress = False
        view.show_download = True
    elif job.status == JobStatus.FAILED:
        view.title = "Job failed"
        view.show_progress = False
        view.error_message = job.error_message or DEFAULT_FAILURE_MESSAGE
    return view
