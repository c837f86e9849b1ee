"""Pydantic schemas for API request/response models."""

from pydantic import BaseModel, ConfigDict, Field

from fadec.control.throttle import ThrottleMode
from fadec.core.events import ThrottleEventType


class ThrottleEventRequest(BaseModel):
    """A lever event, queued until the next gauge update drains it."""
    event_type: ThrottleEventType
    data: int = Field(default=0, description="Raw axis or unsigned throttle value")


class ThrottleEventResponse(BaseModel):
    queued: bool
    pending_events: int


class SensorUpdate(BaseModel):
    """Replacement sensor readings pulled by the next control step."""
    model_config = ConfigDict(allow_inf_nan=False)

    mach_number: float = Field(default=0.0, ge=0.0, description="Mach number")
    ambient_density: float = Field(default=0.0023769, gt=0.0, description="Ambient density (slug/ft3)")
    pressure_altitude: float = Field(default=0.0, description="Pressure altitude (ft)")
    geometric_altitude: float = Field(default=0.0, description="Geometric altitude (ft)")
    airspeed_indicated: float = Field(default=0.0, ge=0.0, description="Indicated airspeed (kt)")
    airspeed_true: float = Field(default=0.0, ge=0.0, description="True airspeed (kt)")
    vertical_speed: float = Field(default=0.0, description="Vertical speed (ft/min)")
    engine1_thrust: float = Field(default=0.0, ge=0.0, description="Engine 1 measured thrust (pdl)")
    engine2_thrust: float = Field(default=0.0, ge=0.0, description="Engine 2 measured thrust (pdl)")


class EngineState(BaseModel):
    """Per-engine FADEC state."""
    fadec_mode: ThrottleMode
    physical_throttle: float = Field(description="Lever axis position")
    engine_throttle: float = Field(description="Commanded engine throttle (%)")
    visual_throttle: float = Field(description="Displayed lever position (%)")
    pid_last_error: float = Field(description="Last climb PID error (pdl)")
    pid_retained_error: float = Field(description="Climb PID retained error (pdl*s)")
    pid_output: float = Field(description="Last climb PID output (ratio)")
    fadec_enabled: bool


class GaugeState(BaseModel):
    """Full gauge state snapshot."""
    enabled: bool
    steps: int = Field(description="Control steps executed")
    simulation_time: float | None = Field(default=None, description="Time of the last step (s)")
    engine1: EngineState
    engine2: EngineState


class FadecToggle(BaseModel):
    enabled: bool
