# station_export/api/health.py
from fastapi import APIRouter
from station_export.config import settings
from station_export.models import HealthResponse
from station_export.services.exporter import SUPPORTED_FORMATS

router = APIRouter()

@router.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Detailed health check"""
    return HealthResponse(
        status="healthy",
        environment=settings.environment,
        formats=list(SUPPORTED_FORMATS),
    )
