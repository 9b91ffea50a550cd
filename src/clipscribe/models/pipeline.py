"""Pipeline state, stage and batch models."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field, computed_field

from clipscribe.models.common import CamelModel


class ClipStage(StrEnum):
    """Stages a single clip moves through."""

    RECEIVED = "received"
    FETCHING = "fetching"
    UPLOADING = "uploading"
    POLLING = "polling"
    COMPOSING_URL = "composing_url"
    FETCHING_TEXT = "fetching_text"
    CLEANUP = "cleanup"
    DONE = "done"
    FAILED = "failed"


class ClipRun(BaseModel):
    """Current state of one clip's pipeline run."""

    clip_id: str | None = None
    stage: ClipStage = Field(default=ClipStage.RECEIVED)
    history: list[ClipStage] = Field(default_factory=list)
    started_at: datetime | None = None
    updated_at: datetime | None = None
    completed_at: datetime | None = None
    error: str | None = None
    local_path: str | None = None


class BatchItemResult(CamelModel):
    clip_id: str
    status: str = "success"
    video_with_subtitles_url: str


class BatchItemError(CamelModel):
    clip_id: str | None = None
    error: str


class BatchOutcome(CamelModel):
    """Aggregated outcome of a sequential batch run, in input order."""

    success: bool = True
    results: list[BatchItemResult] = Field(default_factory=list)
    errors: list[BatchItemError] = Field(default_factory=list)

    @computed_field
    @property
    def processed(self) -> int:
        return len(self.results)

    @computed_field
    @property
    def failed(self) -> int:
        return len(self.errors)
