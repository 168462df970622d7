"""
Base configuration settings.

Application-wide values shared by the local front end: environment name,
log level and the browser origins allowed to call the API. Concern
specific settings live in their own modules with their own env prefix.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Application-wide settings read from VOICECRAFT_* variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="VOICECRAFT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(
        default="VoiceCraft",
        description="Title shown in the OpenAPI docs",
    )
    environment: str = Field(
        default="development",
        description="Deployment environment (development, staging, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR)",
    )
    cors_origins: list[str] = Field(
        default=["http://localhost:8000", "http://127.0.0.1:8000"],
        description="Browser origins allowed to call the API",
    )
