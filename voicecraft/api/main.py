"""
VoiceCraft local API.

Serves the sign-in, upload and jobs views to a single browser tab and
runs the current-job poller in the background of the event loop.

Dependencies: fastapi, voicecraft.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from voicecraft.api.deps.dependencies import get_service_cache
from voicecraft.api.errors import register_exception_handlers
from voicecraft.configs import get_settings
from voicecraft.observability.logger import configure_logging, get_logger
from voicecraft.observability.middleware import RequestLoggingMiddleware
from .routers import (
    auth_router,
    health_router,
    jobs_router,
    uploads_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Warm the tab context on startup; stop polling and close clients on shutdown."""
    logger = get_logger("uvicorn")

    # Startup
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} ({settings.environment})")
    logger.info("Pre-warming service cache...")
    cache = get_service_cache()
    _ = cache.session
    _ = cache.jobs_page
    logger.info("Service cache pre-warmed")

    yield

    # Shutdown
    await cache.aclose()
    cache.clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Build the application: logging, CORS, request logging, domain error
    handlers and the /api/v1 routers.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Text-to-speech narration front end",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    # All routes are versioned under /api/v1
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(uploads_router, prefix="/api/v1")
    app.include_router(jobs_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "voicecraft.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
