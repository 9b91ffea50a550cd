"""Health endpoint."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends

from clipscribe.api.dependencies import get_app_settings
from clipscribe.config import Settings
from clipscribe.models.responses import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_app_settings)):
    """Service health status and timestamp."""
    return HealthResponse(
        service=settings.service_name,
        timestamp=datetime.now(UTC).isoformat().replace("+00:00", "Z"),
    )
