"""Error hierarchy and error response models."""

from pydantic import BaseModel, Field


class ClipscribeError(Exception):
    """Base error for all Clipscribe errors."""

    def __init__(self, message: str, component: str = "", details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.component = component
        self.details = details or {}


class ValidationError(ClipscribeError):
    """Missing or malformed request fields, detected before any I/O."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, component="validation", details=details)


class FetchError(ClipscribeError):
    """Downloading the source clip failed."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, component="fetcher", details=details)


class UploadError(ClipscribeError):
    """The media provider rejected or failed the upload."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, component="media", details=details)


class TranscriptTimeoutError(ClipscribeError):
    """The transcript artifact did not appear within the allowed attempts."""

    def __init__(self, transcript_public_id: str, attempts: int):
        super().__init__(
            f"Transcript generation timed out for: {transcript_public_id}",
            component="poller",
            details={"transcript_public_id": transcript_public_id, "attempts": attempts},
        )
        self.transcript_public_id = transcript_public_id
        self.attempts = attempts


class DispatchError(ClipscribeError):
    """Forwarding the processed result to the webhook failed."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, component="dispatcher", details=details)


class PipelineCancelledError(ClipscribeError):
    """Processing was aborted through a cancellation token."""

    def __init__(self, message: str = "Processing was cancelled", details: dict | None = None):
        super().__init__(message, component="pipeline", details=details)


class ProcessingError(ClipscribeError):
    """Unexpected failure inside the clip pipeline."""

    def __init__(self, message: str, component: str = "pipeline", details: dict | None = None):
        super().__init__(message, component=component, details=details)


class ErrorResponse(BaseModel):
    """Standardized error response for API."""

    error_type: str = Field(..., description="Error category")
    component: str = Field(default="", description="Component that raised the error")
    message: str = Field(..., description="Human-readable error message")
    details: dict = Field(default_factory=dict)
    actionable_guidance: str = Field(default="", description="Suggested user action")
    retry_possible: bool = Field(default=False)

    @classmethod
    def from_exception(
        cls, exc: ClipscribeError, guidance: str = "", retry: bool = False
    ) -> "ErrorResponse":
        return cls(
            error_type=type(exc).__name__,
            component=exc.component,
            message=exc.message,
            details=exc.details,
            actionable_guidance=guidance,
            retry_possible=retry,
        )


def describe_validation_errors(errors: list[dict]) -> str:
    """Flatten pydantic errors into one message ("start_time: Input should be ...")."""
    parts = []
    for error in errors:
        loc = tuple(error.get("loc", ()))
        if loc[:1] == ("body",):
            loc = loc[1:]
        location = ".".join(str(part) for part in loc)
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)
