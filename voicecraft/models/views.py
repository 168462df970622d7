"""
Display models.

Plain data produced by the rendering functions. They carry no markup and
no embedded handlers; actions reference jobs by ID and are wired by the
caller.

Dependencies: pydantic
System role: View contracts for the jobs and current-job views
"""

import enum

from pydantic import BaseModel, Field


class StatusBadge(BaseModel):
    """Status pill shown on a job."""

    css_class: str
    label: str


class JobAction(str, enum.Enum):
    """Actions a job card can offer."""

    DOWNLOAD = "download"
    DELETE = "delete"


class JobCardView(BaseModel):
    """One entry in the job history list."""

    job_id: str
    short_id: str
    date_label: str
    badge: StatusBadge
    meta: list[str] = Field(default_factory=list)
    actions: list[JobAction] = Field(default_factory=list)
    output_key: str | None = None
    error_excerpt: str | None = None
    pending_delete: bool = False


class ListState(str, enum.Enum):
    """Which of the mutually exclusive list containers is visible."""

    LOADING = "loading"
    EMPTY = "empty"
    POPULATED = "populated"
    ERROR = "error"


class JobListView(BaseModel):
    """State of the job history section."""

    state: ListState = ListState.LOADING
    cards: list[JobCardView] = Field(default_factory=list)
    error: str | None = None


class CurrentJobView(BaseModel):
    """State of the in-progress section for the current job."""

    visible: bool = False
    job_id: str | None = None
    title: str = "Creating your narration..."
    badge: StatusBadge | None = None
    meta: list[str] = Field(default_factory=list)
    show_progress: bool = True
    show_download: bool = False
    download_url: str | None = None
    error_message: str | None = None
