"""
Health check API endpoints
"""

from datetime import datetime

from fastapi import APIRouter, Depends

from app.core.config import CloudinaryCredentials
from app.presentation.api.v1.dependencies.media import get_credentials
from app.presentation.api.v1.schemas.media import HealthStatus

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthStatus)
async def health_check(credentials: CloudinaryCredentials = Depends(get_credentials)):
    """
    Health check endpoint; reports degraded when Cloudinary credentials are incomplete
    """
    configured = credentials.is_configured
    return HealthStatus(
        status="healthy" if configured else "degraded",
        cloudinary_configured=configured,
        timestamp=datetime.now(),
    )
