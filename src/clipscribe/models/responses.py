"""HTTP response envelopes."""

from typing import Any

from pydantic import Field

from clipscribe.models.common import CamelModel


class HealthResponse(CamelModel):
    status: str = "healthy"
    service: str
    timestamp: str


class ClipProcessedData(CamelModel):
    clip_id: str
    video_with_subtitles_url: str
    transcript_public_id: str


class ClipSuccessResponse(CamelModel):
    success: bool = True
    message: str = "Clip processed successfully"
    data: ClipProcessedData


class ClipFailureResponse(CamelModel):
    """Single-clip failure, echoing the request for caller-side correlation."""

    success: bool = False
    error: str
    error_type: str = ""
    component: str = ""
    clip_data: Any = Field(default_factory=dict)
