"""Operator controls for the FADEC gauge."""

from fastapi import APIRouter

from backend.api.models.schemas import FadecToggle
from backend.services.gauge_manager import GaugeService

router = APIRouter()
service = GaugeService()


@router.post("/fadec")
async def set_fadec_enabled(toggle: FadecToggle):
    """Switch between closed-loop control and the raw lever curve."""
    service.set_enabled(toggle.enabled)
    return {"status": "ok", "enabled": service.gauge.enabled}


@router.post("/reset")
async def reset_gauge():
    """Rebuild the gauge with fresh controllers and lever positions.

    A running draw loop is stopped for the rebuild and started again.
    """
    await service.restart()
    return {"status": "reset", "running": service.running}
