"""
Unified application settings.

One object holding the application-wide values and the per-concern
settings (Cognito, upload storage, jobs API), each read from its own
environment prefix.

Dependencies: pydantic_settings, voicecraft.configs.*
System role: Central configuration aggregator
"""

from functools import lru_cache

from voicecraft.configs.base import BaseSettings
from voicecraft.configs.cognito import CognitoSettings
from voicecraft.configs.jobs_api import JobsApiSettings
from voicecraft.configs.storage import StorageSettings


class Settings(BaseSettings):
    """Application settings with one nested group per external service."""

    cognito: CognitoSettings = CognitoSettings()
    storage: StorageSettings = StorageSettings()
    jobs_api: JobsApiSettings = JobsApiSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Load settings once per process.

    Usage:
        from voicecraft.configs import get_settings
        poll_interval = get_settings().jobs_api.poll_interval_seconds
    """
    return Settings()
