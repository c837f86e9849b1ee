"""Proportional-Integral-Derivative controllers.

Two anti-windup strategies share one small interface:

    integral_zeroing: trapezoidal integral discarded whenever the error
        changes sign, clamped derivative on the error, optional deadband
    wescott: rectangular integral clamped to a fixed range, derivative
        taken on the plant value to avoid derivative kick

Both controllers consume an error and a plant value expressed in the
same input unit ("In", e.g. poundal) and a time step in seconds, and
produce a dimensionless output ratio.  Gains carry their units:

    gain_proportion   ratio / In
    gain_integral     ratio / (In * s)
    gain_derivative   s / In            (multiplied by an In/s rate)
"""

import math
from dataclasses import dataclass
from typing import Protocol

from fadec.physics.units import clamp


@dataclass(frozen=True)
class PidComponents:
    """Individual PID terms, before the output clamp is applied."""
    proportional: float = 0.0
    integral: float = 0.0
    derivative: float = 0.0

    @property
    def total(self) -> float:
        return self.proportional + self.integral + self.derivative


class Configuration(Protocol):
    """A PID tuning record able to constrain the controller output."""

    output_range: tuple[float, float]

    def clamp_output(self, output: float) -> float:
        ...


class Pid(Protocol):
    """A PID controller advanced one tick per call."""

    def step_with_components(
        self,
        error: float,
        config: Configuration,
        plant_value: float,
        delta_t: float,
    ) -> PidComponents:
        ...

    def step(
        self,
        error: float,
        config: Configuration,
        plant_value: float,
        delta_t: float,
    ) -> float:
        ...

    def reset(self) -> None:
        ...


def clamp_to_range(value: float, bounds: tuple[float, float]) -> float:
    return clamp(value, bounds[0], bounds[1])


def check_step_inputs(error: float, plant_value: float, delta_t: float):
    """Reject inputs that would corrupt the controller state.

    A non-finite value reaching the retained error can only be cleared
    by an explicit reset, so the step fails before touching any state.
    """
    if not (math.isfinite(error) and math.isfinite(plant_value)):
        raise ValueError(
            f"PID inputs must be finite (error={error!r}, plant_value={plant_value!r})"
        )
    if not math.isfinite(delta_t) or delta_t <= 0.0:
        raise ValueError(f"PID delta_t must be a positive duration, got {delta_t!r}")

