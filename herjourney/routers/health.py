"""Health check endpoint."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from herjourney.care.config_loader import get_care_config
from herjourney.config import get_settings

router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check() -> dict:
    """Liveness probe.  Returns 200 if the API process is up."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.environment,
        "state_backend": settings.state_backend,
        "care_config_version": get_care_config().version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
