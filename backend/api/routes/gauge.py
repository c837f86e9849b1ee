"""Host-facing gauge endpoints: lever events, sensor readings, state."""

import logging

from fastapi import APIRouter

from backend.api.models.schemas import (
    GaugeState,
    SensorUpdate,
    ThrottleEventRequest,
    ThrottleEventResponse,
)
from backend.services.gauge_manager import GaugeService
from fadec.core.events import ThrottleEvent

logger = logging.getLogger(__name__)

router = APIRouter()
service = GaugeService()


@router.post("/events", response_model=ThrottleEventResponse)
async def queue_throttle_event(request: ThrottleEventRequest):
    """Queue a lever event; it is applied on the next gauge call."""
    pending = service.queue_event(ThrottleEvent(request.event_type, request.data))
    return ThrottleEventResponse(queued=True, pending_events=pending)


@router.put("/sensors")
async def update_sensors(update: SensorUpdate):
    """Replace the sensor readings the next control step will read."""
    service.set_sensors(update.model_dump())
    return {"status": "ok"}


@router.get("/state", response_model=GaugeState)
async def get_gauge_state():
    return service.get_state()
