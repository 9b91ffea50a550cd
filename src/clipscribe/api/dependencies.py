"""Dependency injection providers for FastAPI.

Each app carries its own settings and pipeline on `app.state`.
"""

from fastapi import FastAPI, Request

from clipscribe.config import Settings
from clipscribe.pipeline.manager import ClipPipeline


def pipeline_for(app: FastAPI) -> ClipPipeline:
    """Return the app's pipeline, building it from the app's settings on first use."""
    if app.state.pipeline is None:
        app.state.pipeline = ClipPipeline.from_settings(app.state.settings)
    return app.state.pipeline


def release_pipeline(app: FastAPI) -> None:
    """Close the app's pipeline; the next request builds a fresh one."""
    pipeline, app.state.pipeline = app.state.pipeline, None
    if pipeline is not None:
        pipeline.close()


def get_pipeline(request: Request) -> ClipPipeline:
    return pipeline_for(request.app)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
