"""PID controller that discards its integral momentum on error sign changes.

Integration uses the trapezoidal rule.  The derivative is taken on the
error and clamped before it contributes to the output, so a sudden large
error cannot let the differentiator dominate.  An optional deadband
(``tolerance``) switches the controller off entirely while the error is
small, sloughing off any retained momentum.
"""

from dataclasses import dataclass

from fadec.control.pid import PidComponents, check_step_inputs, clamp_to_range


@dataclass(frozen=True)
class PidConfiguration:
    """Tuning for the integral-zeroing PID.

    Tuning a PID controller is a non trivial task; gains are applied to
    errors expressed in the caller's input unit (In).
    """
    gain_proportion: float                  # ratio / In
    gain_integral: float                    # ratio / (In * s)
    gain_derivative: float                  # s / In
    output_range: tuple[float, float]       # ratio, inclusive
    derivative_range: tuple[float, float]   # ratio, inclusive
    tolerance: float = 0.0                  # In; errors strictly inside are ignored

    def clamp_output(self, output: float) -> float:
        return clamp_to_range(output, self.output_range)


class PidController:
    """Integral-zeroing PID state.

    Attributes:
        prior_error: Error seen during the last active step (In).
        retained_error: Accumulated error over time (In * s).
    """

    def __init__(self, prior_error: float = 0.0, retained_error: float = 0.0):
        self.prior_error = prior_error
        self.retained_error = retained_error

    @classmethod
    def with_initial(cls, prior_error: float, retained_error: float) -> "PidController":
        return cls(prior_error, retained_error)

    def reset(self):
        """Return to the zeroed state (initial values are not restored)."""
        self.prior_error = 0.0
        self.retained_error = 0.0

    def step_with_components(
        self,
        error: float,
        config: PidConfiguration,
        plant_value: float,
        delta_t: float,
    ) -> PidComponents:
        """Advance one tick and return the unclamped P, I and D terms.

        Args:
            error: Set point minus plant value (In).
            config: Controller tuning.
            plant_value: Unused by this strategy; accepted for interface parity.
            delta_t: Time since the previous step (s), must be positive.
        """
        check_step_inputs(error, plant_value, delta_t)

        # Inside the deadband: remove momentum and command nothing
        if -config.tolerance < error < config.tolerance:
            self.retained_error = 0.0
            return PidComponents()

        proportional = config.gain_proportion * error

        if (error > 0.0) != (self.prior_error >= 0.0):
            retained_error = 0.0
        else:
            retained_error = (
                self.retained_error
                + delta_t * error
                + delta_t * (error - self.prior_error) / 2.0
            )
        integral = retained_error * config.gain_integral

        error_rate = (error - self.prior_error) / delta_t
        derivative = clamp_to_range(
            config.gain_derivative * error_rate, config.derivative_range
        )

        self.prior_error = error
        self.retained_error = retained_error
        return PidComponents(proportional, integral, derivative)

    def step(
        self,
        error: float,
        config: PidConfiguration,
        plant_value: float,
        delta_t: float,
    ) -> float:
        """Advance one tick and return the clamped output ratio."""
        components = self.step_with_components(error, config, plant_value, delta_t)
        return config.clamp_output(components.total)

    def __repr__(self) -> str:
        return (
            f"PidController(prior_error={self.prior_error!r}, "
            f"retained_error={self.retained_error!r})"
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, PidController):
            return NotImplemented
        return (
            self.prior_error == other.prior_error
            and self.retained_error == other.retained_error
        )
