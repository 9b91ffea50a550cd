"""Error handling and request size middleware."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Receive, Scope, Send

from clipscribe.models.errors import ClipscribeError, ErrorResponse, ValidationError

logger = logging.getLogger(__name__)


async def clipscribe_error_handler(request: Request, exc: ClipscribeError) -> JSONResponse:
    """Handle ClipscribeError exceptions the routes do not answer themselves.

    The clip routes reply with their own failure envelopes, so in practice
    this sees request-level rejections such as an oversized batch.
    """
    response = ErrorResponse.from_exception(exc, guidance=_get_guidance(exc))
    status_code = _get_status_code(exc)
    return JSONResponse(status_code=status_code, content=response.model_dump())


class BodySizeLimitMiddleware:
    """Reject requests whose declared body exceeds `max_bytes` with HTTP 413."""

    def __init__(self, app: ASGIApp, max_bytes: int):
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            content_length = Headers(scope=scope).get("content-length", "")
            if content_length.isdigit() and int(content_length) > self.max_bytes:
                logger.warning(f"Rejected {content_length}-byte request to {scope['path']}")
                error = ErrorResponse(
                    error_type="PayloadTooLarge",
                    component="api",
                    message=f"Request body exceeds {self.max_bytes} bytes",
                    actionable_guidance="Send media by URL instead of embedding it.",
                )
                response = JSONResponse(status_code=413, content=error.model_dump())
                await response(scope, receive, send)
                return
        await self.app(scope, receive, send)


def _get_status_code(exc: ClipscribeError) -> int:
    """Map error type to HTTP status code."""
    if isinstance(exc, ValidationError):
        return 400
    return 500


def _get_guidance(exc: ClipscribeError) -> str:
    """Generate actionable guidance based on error type."""
    if isinstance(exc, ValidationError):
        return "Check the request body fields."
    return "Please try again or contact support."
