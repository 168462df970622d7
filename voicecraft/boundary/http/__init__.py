"""
HTTP boundary modules.

Exports: JobsApiClient
"""

from .jobs_api_client import JobsApiClient

__all__ = ["JobsApiClient"]
