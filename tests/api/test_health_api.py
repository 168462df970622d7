import pytest
from fastapi.testclient import TestClient

from voicecraft.api.deps import get_settings_dependency
from voicecraft.api.main import create_app
from voicecraft.configs import Settings
from voicecraft.configs.jobs_api import JobsApiSettings
from voicecraft.configs.storage import StorageSettings


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="staging",
        jobs_api=JobsApiSettings(base_url="https://api.example.com/prod"),
        storage=StorageSettings(bucket="narration-uploads"),
    )


@pytest.fixture
def client(settings):
    app = create_app()
    app.dependency_overrides[get_settings_dependency] = lambda: settings
    return TestClient(app)


def test_health_check(client, settings):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "message": "Server Healthy",
        "environment": "staging",
        "jobs_api_url": "https://api.example.com/prod",
        "uploads_bucket": "narration-uploads",
        "cognito_region": settings.cognito.region,
    }
