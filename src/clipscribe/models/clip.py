"""Clip request and per-clip result models."""

from enum import StrEnum
from pathlib import Path
from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from clipscribe.models.common import CamelModel
from clipscribe.models.errors import ValidationError, describe_validation_errors


def raw_clip_id(payload: Any) -> str | None:
    """Best-effort clip id from an entry that may not validate."""
    if isinstance(payload, ClipRequest):
        return payload.clip_id
    if not isinstance(payload, dict):
        return None
    for key in ("new_public_id", "public_id"):
        value = payload.get(key)
        if isinstance(value, (str, int, float)) and value != "":
            return str(value)
    return None


class ClipRequest(BaseModel):
    """Inbound clip descriptor.

    Unknown fields are kept so they can be echoed back to the caller and
    forwarded to the webhook untouched.
    """

    model_config = ConfigDict(extra="allow", frozen=True, coerce_numbers_to_str=True)

    public_id: str | None = Field(default=None, description="Identifier of the source clip")
    new_public_id: str | None = Field(default=None, description="Identifier for the upload")
    secure_url: str | None = Field(default=None, description="HTTPS URL of the source clip")
    url: str | None = Field(default=None, description="Fallback URL of the source clip")
    start_time: float | None = Field(default=None, description="Clip start in seconds")
    clip_duration: float | None = Field(default=None, description="Clip length in seconds")

    @classmethod
    def from_payload(cls, payload: Any) -> "ClipRequest":
        """Validate one raw clip entry, raising the service's ValidationError."""
        if isinstance(payload, cls):
            return payload
        if not isinstance(payload, dict):
            raise ValidationError(
                f"Clip entry must be a JSON object, got {type(payload).__name__}"
            )
        try:
            return cls.model_validate(payload)
        except pydantic.ValidationError as e:
            raise ValidationError(
                f"Invalid clip request: {describe_validation_errors(e.errors())}",
                details={"clip_id": raw_clip_id(payload)},
            ) from e

    @property
    def source_url(self) -> str | None:
        return self.secure_url or self.url

    @property
    def clip_id(self) -> str | None:
        return self.new_public_id or self.public_id

    def passthrough(self) -> dict[str, Any]:
        """Return the fields exactly as the caller sent them."""
        return self.model_dump(mode="json", exclude_unset=True)


class DownloadedClip(BaseModel):
    """A clip written to the local scratch directory."""

    clip_id: str = Field(..., min_length=1)
    path: Path
    size_bytes: int = Field(default=0, ge=0)


class UploadOutcome(BaseModel):
    """What the media provider reported for an accepted upload."""

    model_config = ConfigDict(frozen=True)

    public_id: str = Field(..., min_length=1)
    secure_url: str
    duration: float | None = None
    format: str | None = None
    transcript_public_id: str = Field(..., description="Predicted transcript artifact id")


class TranscriptTextStatus(StrEnum):
    """Whether the optional transcript text could be retrieved."""

    FETCHED = "fetched"
    UNAVAILABLE = "unavailable"


class ProcessedResult(CamelModel):
    """Final record for a clip that reached DONE."""

    clip_id: str
    video_public_id: str
    transcript_public_id: str
    video_url: str
    video_with_subtitles_url: str = Field(..., min_length=1)
    duration: float | None = None
    format: str | None = None
    transcript_text: str = ""
    transcript_status: TranscriptTextStatus = TranscriptTextStatus.FETCHED
    original_clip_data: dict[str, Any] = Field(default_factory=dict)

    @property
    def degraded(self) -> bool:
        return self.transcript_status != TranscriptTextStatus.FETCHED
