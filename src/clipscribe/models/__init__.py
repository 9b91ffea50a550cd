"""Data models for Clipscribe."""

from clipscribe.models.clip import (
    ClipRequest,
    DownloadedClip,
    ProcessedResult,
    TranscriptTextStatus,
    UploadOutcome,
)
from clipscribe.models.errors import (
    ClipscribeError,
    DispatchError,
    ErrorResponse,
    FetchError,
    PipelineCancelledError,
    ProcessingError,
    TranscriptTimeoutError,
    UploadError,
    ValidationError,
)
from clipscribe.models.pipeline import (
    BatchItemError,
    BatchItemResult,
    BatchOutcome,
    ClipRun,
    ClipStage,
)
from clipscribe.models.responses import (
    ClipFailureResponse,
    ClipProcessedData,
    ClipSuccessResponse,
    HealthResponse,
)

__all__ = [
    "BatchItemError",
    "BatchItemResult",
    "BatchOutcome",
    "ClipFailureResponse",
    "ClipProcessedData",
    "ClipRequest",
    "ClipRun",
    "ClipStage",
    "ClipSuccessResponse",
    "ClipscribeError",
    "DispatchError",
    "DownloadedClip",
    "ErrorResponse",
    "FetchError",
    "HealthResponse",
    "PipelineCancelledError",
    "ProcessedResult",
    "ProcessingError",
    "TranscriptTextStatus",
    "TranscriptTimeoutError",
    "UploadError",
    "UploadOutcome",
    "ValidationError",
]
