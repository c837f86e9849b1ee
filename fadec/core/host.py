"""Host simulator interface.

The gauge pulls sensor readings from the host and pushes three outputs
per engine back to it: the FADEC mode indicator, the visual lever
position, and (batched across both engines) the engine throttle command.
"""

from dataclasses import dataclass
from typing import Protocol

from fadec.control.throttle import ThrottleMode, ThrottlePercent
from fadec.core.engines import EngineData, EngineNumber
from fadec.core.state import EngineReadings, Environment, Instruments


class HostInterfaceError(RuntimeError):
    """The host rejected a read or a command."""


@dataclass(frozen=True)
class EngineDataControl:
    """Batched engine throttle command for both engines (percent)."""
    throttle_engine1: float
    throttle_engine2: float

    @classmethod
    def from_engine_data(cls, throttles: EngineData[ThrottlePercent]) -> "EngineDataControl":
        return cls(throttles.engine1.value, throttles.engine2.value)


class HostInterface(Protocol):
    def read_environment(self) -> Environment:
        ...

    def set_mode(self, engine: EngineNumber, mode: ThrottleMode):
        ...

    def set_visual_throttle(self, engine: EngineNumber, position: ThrottlePercent):
        ...

    def update_engine_throttles(self, update: EngineDataControl):
        ...


class InMemoryHost:
    """Host that keeps sensor values and received commands in memory.

    Sensor values are replaced by whoever owns the host (the HTTP service,
    a scenario runner, a test).  ``available`` simulates a disconnected
    host: while False every command raises ``HostInterfaceError``.
    """

    def __init__(self, environment: Environment | None = None):
        self.environment = environment or Environment()
        self.available = True
        self.modes: EngineData[ThrottleMode] = EngineData.new(ThrottleMode.UNDEFINED)
        self.visual_throttles: EngineData[ThrottlePercent] = EngineData.new(ThrottlePercent.MIN)
        self.engine_throttles: EngineDataControl | None = None
        self.commands_rejected = 0

    def set_sensors(
        self,
        instruments: Instruments,
        thrust: EngineData[float] | None = None,
    ):
        engines = self.environment.engines
        if thrust is not None:
            engines = thrust.map(lambda _, t: EngineReadings(thrust=t))
        self.environment = Environment(instruments=instruments, engines=engines)

    def read_environment(self) -> Environment:
        return self.environment

    def _check_available(self):
        if not self.available:
            self.commands_rejected += 1
            raise HostInterfaceError("host interface unavailable")

    def set_mode(self, engine: EngineNumber, mode: ThrottleMode):
        self._check_available()
        self.modes[engine] = mode

    def set_visual_throttle(self, engine: EngineNumber, position: ThrottlePercent):
        self._check_available()
        self.visual_throttles[engine] = position

    def update_engine_throttles(self, update: EngineDataControl):
        self._check_available()
        self.engine_throttles = update
