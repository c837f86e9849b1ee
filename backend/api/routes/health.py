from fastapi import APIRouter

from backend.core.config import settings
from backend.services.gauge_manager import GaugeService

router = APIRouter()


@router.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "gauge_running": GaugeService().running,
    }
