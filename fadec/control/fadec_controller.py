"""CJ4 FADEC controller.

Converts the lever position into an engine throttle command, one engine
per instance:

    Takeoff             full throttle, no feedback
    Climb               PID holds gross thrust on the climb schedule
    Cruise / Undefined  lever mapped directly against the cruise range
    Disabled            exponential lever curve, mode logic bypassed
"""

import logging
from dataclasses import dataclass

from fadec.control.pid import Configuration, Pid, PidComponents, clamp_to_range
from fadec.control.pid.integral_zeroing import PidConfiguration, PidController
from fadec.control.throttle import (
    THRUST_MAX_PDL,
    ThrottleAxis,
    ThrottleMode,
    ThrottlePercent,
    ThrustValue,
)
from fadec.control.thrust_schedule import (
    THRUST_EFFICIENCY,
    calculate_climb_thrust_target,
    convert_to_gross_thrust,
)
from fadec.physics.units import clamp, percent

logger = logging.getLogger(__name__)

DISABLED_CURVE_EXPONENT = 3.5

# Sensor readings are held to these bounds before they reach the climb law
MACH_RANGE = (0.0, 2.0)
DENSITY_RANGE_SLUG_FT3 = (0.0, 0.005)
ALTITUDE_RANGE_FT = (-5000.0, 100_000.0)
THRUST_RANGE_PDL = (0.0, THRUST_MAX_PDL)

CLIMB_PID_CONFIG = PidConfiguration(
    gain_proportion=percent(1.2) / 1000.0,      # per pdl
    gain_integral=percent(0.0001) / 1.0,        # per pdl*s
    gain_derivative=0.018 / 1000.0,             # s per pdl
    output_range=(percent(-2.0), percent(2.0)),
    derivative_range=(percent(-20.0), percent(20.0)),
    tolerance=0.0,
)


@dataclass(frozen=True)
class FadecOutput:
    """Result of one controller step."""
    thrust: ThrustValue
    throttle: ThrottlePercent
    components: PidComponents = PidComponents()
    pid_output: float = 0.0

    def __iter__(self):
        # Unpacks as (thrust, throttle)
        yield self.thrust
        yield self.throttle


class FadecController:
    """Per-engine FADEC state.

    Args:
        climb_pid_config: Tuning for the climb thrust PID.
        pid: Climb PID state; any strategy matching ``climb_pid_config``.
            Defaults to an integral-zeroing controller.
        enabled: When False the feedback system is bypassed entirely.
        reset_on_mode_change: Zero the PID whenever the mode leaves or
            re-enters climb.  Off by default so in-flight correction state
            survives a brief detent flicker.
    """

    def __init__(
        self,
        climb_pid_config: Configuration = CLIMB_PID_CONFIG,
        pid: Pid | None = None,
        enabled: bool = True,
        reset_on_mode_change: bool = False,
    ):
        self.climb_pid_config = climb_pid_config
        self.pid_state: Pid = pid if pid is not None else PidController()
        self.throttle_selected = 0.0    # ratio
        self.enabled = enabled
        self.reset_on_mode_change = reset_on_mode_change
        self.last_mode: ThrottleMode | None = None
        self.last_error = 0.0
        self.last_components = PidComponents()
        self.last_output = 0.0

    def get_desired_throttle(
        self,
        axis: ThrottleAxis,
        mode: ThrottleMode,
        engine_thrust_pdl: float,
        mach: float,
        ambient_density_slug_ft3: float,
        pressure_altitude_ft: float,
        delta_t: float,
    ) -> FadecOutput:
        """Step the controller and return the thrust target and throttle command.

        Args:
            axis: Current physical lever position.
            mode: Mode selected from ``axis``.
            engine_thrust_pdl: Measured engine thrust.
            mach: Mach number.
            ambient_density_slug_ft3: Ambient air density.
            pressure_altitude_ft: Pressure altitude.
            delta_t: Elapsed time since the previous step (s).
        """
        current_throttle = axis.to_ratio()

        if not self.enabled:
            self.throttle_selected = current_throttle
            throttle_exp = current_throttle ** DISABLED_CURVE_EXPONENT
            return FadecOutput(
                ThrustValue.from_ratio(throttle_exp),
                ThrottlePercent.from_ratio(throttle_exp),
            )

        self._track_mode(mode)

        if mode is ThrottleMode.TAKEOFF:
            return FadecOutput(ThrustValue.MAX, ThrottlePercent.MAX)

        if mode is ThrottleMode.CLIMB:
            return self._climb(
                engine_thrust_pdl,
                mach,
                ambient_density_slug_ft3,
                pressure_altitude_ft,
                delta_t,
            )

        # Cruise and undefined map the lever directly
        self.throttle_selected = current_throttle
        effective_thrust = axis.normalize_cruise() * THRUST_EFFICIENCY
        return FadecOutput(
            ThrustValue.from_ratio(effective_thrust),
            ThrottlePercent.from_ratio(effective_thrust),
        )

    def _climb(
        self,
        engine_thrust_pdl: float,
        mach: float,
        ambient_density_slug_ft3: float,
        pressure_altitude_ft: float,
        delta_t: float,
    ) -> FadecOutput:
        gross_thrust = convert_to_gross_thrust(
            clamp_to_range(engine_thrust_pdl, THRUST_RANGE_PDL),
            clamp_to_range(mach, MACH_RANGE),
        )
        thrust_target = calculate_climb_thrust_target(
            clamp_to_range(ambient_density_slug_ft3, DENSITY_RANGE_SLUG_FT3),
            clamp_to_range(pressure_altitude_ft, ALTITUDE_RANGE_FT),
        )
        error = thrust_target - gross_thrust

        components = self.pid_state.step_with_components(
            error, self.climb_pid_config, gross_thrust, delta_t
        )
        output = self.climb_pid_config.clamp_output(components.total)
        self.last_error = error
        self.last_components = components
        self.last_output = output

        self.throttle_selected = clamp(self.throttle_selected + output, 0.0, 1.0)
        logger.debug(
            "Climb: target %.1f pdl, gross %.1f pdl, error %+.2f pdl, "
            "change %+.4f -> %.4f of maximum",
            thrust_target, gross_thrust, error, output, self.throttle_selected,
        )

        return FadecOutput(
            ThrustValue.from_force(thrust_target),
            ThrottlePercent.from_ratio(self.throttle_selected),
            components,
            output,
        )

    def _track_mode(self, mode: ThrottleMode):
        previous = self.last_mode
        self.last_mode = mode
        if previous is None or previous is mode:
            return

        logger.debug("FADEC mode %s -> %s", previous, mode)
        if self.reset_on_mode_change and ThrottleMode.CLIMB in (previous, mode):
            self.pid_state.reset()

    def reset(self):
        """Zero the climb PID and the selected throttle."""
        self.pid_state.reset()
        self.throttle_selected = 0.0
        self.last_mode = None
        self.last_error = 0.0
        self.last_components = PidComponents()
        self.last_output = 0.0
