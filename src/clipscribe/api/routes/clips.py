"""Clip processing endpoints."""

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from clipscribe.api.dependencies import get_app_settings, get_pipeline
from clipscribe.config import Settings
from clipscribe.models.clip import ClipRequest
from clipscribe.models.errors import ClipscribeError, ValidationError
from clipscribe.models.pipeline import BatchOutcome
from clipscribe.models.responses import (
    ClipFailureResponse,
    ClipProcessedData,
    ClipSuccessResponse,
)
from clipscribe.pipeline.manager import ClipPipeline
from clipscribe.pipeline.poller import CancellationToken

logger = logging.getLogger(__name__)

router = APIRouter(tags=["clips"])

DISCONNECT_CHECK_SECONDS = 1.0


class BatchRequest(BaseModel):
    clips: list[Any] = Field(default_factory=list, description="Raw clip descriptors")


async def _cancel_on_disconnect(request: Request, token: CancellationToken) -> None:
    while not token.cancelled:
        if await request.is_disconnected():
            logger.warning(f"Client disconnected from {request.url.path}, cancelling")
            token.cancel()
            return
        await asyncio.sleep(DISCONNECT_CHECK_SECONDS)


def _failure(e: ClipscribeError, clip_data: Any) -> JSONResponse:
    failure = ClipFailureResponse(
        error=e.message,
        error_type=type(e).__name__,
        component=e.component,
        clip_data=clip_data,
    )
    return JSONResponse(status_code=500, content=failure.to_wire())


@router.post(
    "/process-clip",
    response_model=ClipSuccessResponse,
    responses={500: {"model": ClipFailureResponse, "description": "Error processing clip"}},
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": ClipRequest.model_json_schema()}},
        }
    },
)
async def process_clip(
    request: Request,
    payload: Any = Body(None),
    pipeline: ClipPipeline = Depends(get_pipeline),
):
    """Process and transcribe a single video clip."""
    try:
        clip = ClipRequest.from_payload(payload)
    except ClipscribeError as e:
        logger.error(f"Rejected clip request: {e.message}")
        return _failure(e, payload)

    logger.info(f"New clip received: {clip.clip_id} (start {clip.start_time or 0}s)")
    token = CancellationToken()
    watcher = asyncio.create_task(_cancel_on_disconnect(request, token))
    try:
        result = await run_in_threadpool(pipeline.process_and_dispatch, clip, token)
    except ClipscribeError as e:
        logger.error(f"Error processing clip {clip.clip_id}: {e.message}")
        return _failure(e, clip.passthrough())
    finally:
        watcher.cancel()

    return ClipSuccessResponse(
        data=ClipProcessedData(
            clip_id=result.clip_id,
            video_with_subtitles_url=result.video_with_subtitles_url,
            transcript_public_id=result.transcript_public_id,
        )
    )


@router.post("/process-clips-batch", response_model=BatchOutcome)
async def process_clips_batch(
    batch: BatchRequest,
    pipeline: ClipPipeline = Depends(get_pipeline),
    settings: Settings = Depends(get_app_settings),
):
    """Process and transcribe multiple video clips, one after another."""
    if len(batch.clips) > settings.max_batch_clips:
        raise ValidationError(
            f"Batch has {len(batch.clips)} clips, the limit is {settings.max_batch_clips}",
            details={"clips": len(batch.clips), "limit": settings.max_batch_clips},
        )
    return await run_in_threadpool(pipeline.process_batch, batch.clips)
