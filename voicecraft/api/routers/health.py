"""
Health check API endpoints.

Routes: GET /health

Reports the environment and the external endpoints this instance talks
to, so a misconfigured deployment is visible without signing in.

Dependencies: voicecraft.configs
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from voicecraft.api.deps import get_settings_dependency
from voicecraft.configs import Settings


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    environment: str
    jobs_api_url: str
    uploads_bucket: str
    cognito_region: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings_dependency)) -> HealthResponse:
    """Basic health check with the configured endpoints."""
    return HealthResponse(
        status="healthy",
        message="Server Healthy",
        environment=settings.environment,
        jobs_api_url=settings.jobs_api.base_url,
        uploads_bucket=settings.storage.bucket,
        cognito_region=settings.cognito.region,
    )
