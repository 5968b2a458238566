"""Health check routes"""

from fastapi import APIRouter, Depends

from api.dependencies import get_settings
from api.responses import HealthResponse
from app.config import Settings

router = APIRouter(tags=["Health"])


@router.get("/health-check", response_model=HealthResponse)
def health_check(settings: Settings = Depends(get_settings)):
    """Basic health check endpoint"""
    return HealthResponse(
        status="ok", service=settings.app_name, version=settings.app_version
    )
