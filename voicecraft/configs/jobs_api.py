"""
Jobs REST API configuration.

Base URL, timeouts and polling cadence for the narration job API.

Dependencies: pydantic_settings
System role: REST API client configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class JobsApiSettings(BaseSettings):
    """Settings for the narration jobs REST API."""

    model_config = SettingsConfigDict(
        env_prefix="JOBS_API_",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(
        default="http://localhost:3001",
        description="Base URL of the jobs REST API",
    )
    timeout_seconds: float = Field(
        default=15.0,
        description="Per-request timeout in seconds",
    )
    poll_interval_seconds: float = Field(
        default=4.0,
        description="Seconds between job status polls",
    )
    max_poll_duration_seconds: float | None = Field(
        default=None,
        description="Give up polling after this many seconds (None polls until settled)",
    )
    download_url_expiry_seconds: int = Field(
        default=900,
        description="Lifetime of backend-minted download links (informational)",
    )
