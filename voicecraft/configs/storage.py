"""
Upload storage configuration.

Settings for the S3 bucket that receives narration scripts, plus the
file constraints applied before any upload.

Dependencies: pydantic_settings
System role: Upload bucket configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Settings for S3 upload operations."""

    model_config = SettingsConfigDict(
        env_prefix="S3_UPLOADS_",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(
        default="voicecraft-dev-uploads",
        description="S3 bucket receiving narration scripts",
    )
    region: str = Field(
        default="eu-west-2",
        description="AWS region for S3 bucket",
    )
    max_file_size: int = Field(
        default=5 * 1024 * 1024,
        description="Maximum script size in bytes (default 5 MiB)",
    )
    allowed_extension: str = Field(
        default=".txt",
        description="Only accepted script extension",
    )
    content_type: str = Field(
        default="text/plain",
        description="Content type sent with the upload",
    )
