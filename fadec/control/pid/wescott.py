"""PID controller following Tim Wescott's "PID Without a PhD".

The integral accumulates rectangularly and the accumulator itself is
clamped every step.  The derivative is computed from the rate of change
of the plant value rather than the error, so an abrupt set point change
produces no derivative kick.  The derivative term is added to the output
as ``gain_derivative * d(plant)/dt``; a damping configuration therefore
uses a negative derivative gain.
"""

from dataclasses import dataclass

from fadec.control.pid import PidComponents, check_step_inputs, clamp_to_range


@dataclass(frozen=True)
class PidConfiguration:
    """Tuning for the clamped-integral PID."""
    gain_proportion: float                  # ratio / In
    gain_integral: float                    # ratio / (In * s)
    gain_derivative: float                  # s / In
    output_range: tuple[float, float]       # ratio, inclusive
    integral_range: tuple[float, float]     # In * s, inclusive

    def clamp_output(self, output: float) -> float:
        return clamp_to_range(output, self.output_range)


class PidController:
    """Clamped-integral PID state.

    Attributes:
        prior_plant_value: Plant value seen during the last step (In).
        retained_error: Accumulated error over time (In * s).
    """

    def __init__(self, prior_plant_value: float = 0.0, retained_error: float = 0.0):
        self.prior_plant_value = prior_plant_value
        self.retained_error = retained_error

    @classmethod
    def with_initial(cls, initial_plant_value: float, retained_error: float) -> "PidController":
        return cls(initial_plant_value, retained_error)

    def reset(self):
        self.prior_plant_value = 0.0
        self.retained_error = 0.0

    def step_with_components(
        self,
        error: float,
        config: PidConfiguration,
        plant_value: float,
        delta_t: float,
    ) -> PidComponents:
        check_step_inputs(error, plant_value, delta_t)

        proportional = config.gain_proportion * error

        self.retained_error = clamp_to_range(
            self.retained_error + error * delta_t, config.integral_range
        )
        integral = config.gain_integral * self.retained_error

        rate_of_change = (plant_value - self.prior_plant_value) / delta_t
        derivative = config.gain_derivative * rate_of_change

        self.prior_plant_value = plant_value
        return PidComponents(proportional, integral, derivative)

    def step(
        self,
        error: float,
        config: PidConfiguration,
        plant_value: float,
        delta_t: float,
    ) -> float:
        components = self.step_with_components(error, config, plant_value, delta_t)
        return config.clamp_output(components.total)

    def __repr__(self) -> str:
        return (
            f"PidController(prior_plant_value={self.prior_plant_value!r}, "
            f"retained_error={self.retained_error!r})"
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, PidController):
            return NotImplemented
        return (
            self.prior_plant_value == other.prior_plant_value
            and self.retained_error == other.retained_error
        )
