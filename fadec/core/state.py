"""Aircraft state shared between the gauge, the host and the recorder."""

from dataclasses import dataclass, field

from fadec.control.fadec_controller import FadecController
from fadec.control.throttle import ThrottleAxis, ThrottleMode, ThrottlePercent
from fadec.core.engines import EngineData


@dataclass(frozen=True)
class Instruments:
    """Environmental readings from general instrumentation."""
    mach_number: float = 0.0
    ambient_density: float = 0.0023769      # slug/ft3
    geometric_altitude: float = 0.0         # ft
    pressure_altitude: float = 0.0          # ft
    airspeed_indicated: float = 0.0         # kt
    airspeed_true: float = 0.0              # kt
    vertical_speed: float = 0.0             # ft/min


@dataclass(frozen=True)
class EngineReadings:
    thrust: float = 0.0                     # pdl


@dataclass(frozen=True)
class Environment:
    """Sensor inputs for one control step."""
    instruments: Instruments = field(default_factory=Instruments)
    engines: EngineData[EngineReadings] = field(
        default_factory=lambda: EngineData.new(EngineReadings())
    )


@dataclass
class Engine:
    """Per-engine aggregate, mutated in place once per tick."""
    mode: ThrottleMode = ThrottleMode.UNDEFINED
    engine_throttle: ThrottlePercent = ThrottlePercent.MIN
    visual_throttle: ThrottlePercent = ThrottlePercent.MIN
    physical_throttle: ThrottleAxis = ThrottleAxis.MIN
    fadec: FadecController = field(default_factory=FadecController)

    def get_state(self) -> dict:
        pid = self.fadec.pid_state
        components = self.fadec.last_components
        return {
            "fadec_mode": self.mode.value,
            "physical_throttle": round(self.physical_throttle.value, 1),
            "engine_throttle": round(self.engine_throttle.value, 3),
            "visual_throttle": round(self.visual_throttle.value, 3),
            "pid_last_error": self.fadec.last_error,
            "pid_retained_error": pid.retained_error,
            "pid_proportional": components.proportional,
            "pid_integral": components.integral,
            "pid_derivative": components.derivative,
            "pid_output": self.fadec.last_output,
            "fadec_enabled": self.fadec.enabled,
        }


@dataclass
class Aircraft:
    engines: EngineData[Engine] = field(
        default_factory=lambda: EngineData.new_from(lambda _: Engine())
    )


@dataclass(frozen=True)
class Snapshot:
    """One control step as seen by the recorder."""
    sim_time: float                         # s since start
    delta_t: float                          # s
    environment: Environment
    engines: EngineData[dict]

    def to_record(self) -> dict:
        """Flatten into a single-level record (one CSV row)."""
        ins = self.environment.instruments
        record = {
            "simulation_time": self.sim_time,
            "delta_t": self.delta_t,
            "airspeed_indicated": ins.airspeed_indicated,
            "airspeed_true": ins.airspeed_true,
            "vertical_speed": ins.vertical_speed,
            "mach_number": ins.mach_number,
            "ambient_density": ins.ambient_density,
            "geometric_altitude": ins.geometric_altitude,
            "pressure_altitude": ins.pressure_altitude,
        }
        for engine, readings in self.environment.engines.items():
            record[f"{engine.value}_thrust"] = readings.thrust
            for key, value in self.engines[engine].items():
                record[f"{engine.value}_{key}"] = value
        return record

    @classmethod
    def capture(
        cls, sim_time: float, delta_t: float, environment: Environment, aircraft: Aircraft
    ) -> "Snapshot":
        return cls(
            sim_time=sim_time,
            delta_t=delta_t,
            environment=environment,
            engines=aircraft.engines.map(lambda _, e: e.get_state()),
        )
