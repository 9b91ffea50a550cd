"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clipscribe.api.dependencies import get_pipeline, pipeline_for, release_pipeline
from clipscribe.api.middleware import BodySizeLimitMiddleware, clipscribe_error_handler
from clipscribe.api.routes import clips, health
from clipscribe.config import Settings, get_settings
from clipscribe.models.errors import ClipscribeError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    override = app.dependency_overrides.get(get_pipeline)
    pipeline = override() if override is not None else pipeline_for(app)
    pipeline.temp_store.cleanup_stale(app.state.settings.temp_file_ttl_seconds)
    logger.info(f"Scratch directory: {pipeline.temp_store.base_dir}")
    yield
    release_pipeline(app)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    app = FastAPI(
        title="Video Clip Transcription API",
        description="API for processing and transcribing video clips via Cloudinary and a webhook",
        version="1.0.0",
        docs_url="/api-docs",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.pipeline = None

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_body_size_mb * 1024 * 1024)

    # Error handlers
    app.add_exception_handler(ClipscribeError, clipscribe_error_handler)

    # Routes, reachable both bare and under /api
    app.include_router(health.router)
    app.include_router(health.router, prefix="/api")
    app.include_router(clips.router)
    app.include_router(clips.router, prefix="/api/clips")

    return app


app = create_app()
