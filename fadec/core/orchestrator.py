"""SimPy-based closed-loop scenario runner.

Drives the FADEC gauge at the host draw rate against a scripted flight
profile: lever events at fixed times, a constant-rate climb, and an
airspeed schedule.  Engine thrust is a static response to the last
throttle command (command ratio times the density thrust ceiling, seen
through the Mach correction); there is no spool or thermodynamic model.
"""

import logging

import numpy as np
import simpy

from fadec.control.throttle import ThrottleMode
from fadec.control.thrust_schedule import convert_to_gross_thrust, get_max_density_thrust
from fadec.core.engines import EngineData
from fadec.core.events import ThrottleEvent
from fadec.core.gauge import FdGauge
from fadec.core.host import InMemoryHost
from fadec.core.recorder import FlightDataRecorder
from fadec.core.state import Instruments, Snapshot
from fadec.physics import atmosphere
from fadec.physics.units import feet_to_meters

logger = logging.getLogger(__name__)


class ClimbSimulation:
    """Runs a lever schedule and climb profile through the FADEC gauge."""

    DEFAULT_PARAMS = {
        "draw_dt": 1.0 / 60.0,           # s, host draw interval
        "update_interval": 0.050,        # s, gauge control rate limit
        "initial_altitude": 0.0,         # ft
        "climb_rate": 3000.0,            # ft/min while in climb or takeoff
        "ceiling": 45_000.0,             # ft
        "initial_tas": 150.0,            # kt
        "climb_tas": 290.0,              # kt
        "acceleration": 2.0,             # kt/s
        "thrust_scatter": 0.0,           # pdl, std dev of thrust sensor noise
        "seed": None,
    }

    def __init__(
        self,
        lever_schedule: list[tuple[float, ThrottleEvent]] | None = None,
        params: dict | None = None,
        enabled: bool = True,
        reset_pid_on_mode_change: bool = False,
        recorder: FlightDataRecorder | None = None,
    ):
        p = {**self.DEFAULT_PARAMS, **(params or {})}
        self.draw_dt = p["draw_dt"]
        self.climb_rate = p["climb_rate"]
        self.ceiling = p["ceiling"]
        self.climb_tas = p["climb_tas"]
        self.acceleration = p["acceleration"]
        self.thrust_scatter = p["thrust_scatter"]
        self._rng = np.random.default_rng(p["seed"])

        self.env = simpy.Environment()
        self.host = InMemoryHost()
        self.gauge = FdGauge(
            self.host,
            enabled=enabled,
            update_interval_s=p["update_interval"],
            reset_pid_on_mode_change=reset_pid_on_mode_change,
            recorder=recorder,
            clock=lambda: self.env.now,
        )
        self.lever_schedule = sorted(lever_schedule or [], key=lambda item: item[0])

        # Flight state
        self.altitude = p["initial_altitude"]    # ft
        self.tas = p["initial_tas"]              # kt
        self.thrust: EngineData[float] = EngineData.new(0.0)
        self.snapshots: list[Snapshot] = []

        self.env.process(self._lever_process(self.env))
        self.env.process(self._draw_loop(self.env))

    def _lever_process(self, env: simpy.Environment):
        for at, event in self.lever_schedule:
            if at > env.now:
                yield env.timeout(at - env.now)
            self.gauge.queue_event(event)

    def _draw_loop(self, env: simpy.Environment):
        while True:
            self._advance_flight(self.draw_dt)
            self._publish_sensors()
            snapshot = self.gauge.on_update()
            if snapshot is not None:
                self.snapshots.append(snapshot)
                self._respond_to_commands()
            yield env.timeout(self.draw_dt)

    def _advance_flight(self, dt: float):
        modes = [engine.mode for engine in self.gauge.aircraft.engines]
        if any(m in (ThrottleMode.CLIMB, ThrottleMode.TAKEOFF) for m in modes):
            self.altitude = min(self.altitude + self.climb_rate / 60.0 * dt, self.ceiling)
            self.tas = min(self.tas + self.acceleration * dt, self.climb_tas)

    def _publish_sensors(self):
        instruments = Instruments(
            mach_number=atmosphere.mach_number(self.tas, self.altitude),
            ambient_density=atmosphere.density_slug_ft3(self.altitude),
            geometric_altitude=self.altitude,
            pressure_altitude=self.altitude,
            airspeed_true=self.tas,
            airspeed_indicated=self.tas * float(
                np.sqrt(atmosphere.density(feet_to_meters(self.altitude)) / atmosphere.density(0.0))
            ),
            vertical_speed=self.climb_rate if self.altitude < self.ceiling else 0.0,
        )
        thrust = self.thrust
        if self.thrust_scatter > 0:
            thrust = thrust.map(
                lambda _, t: max(t + float(self._rng.normal(0.0, self.thrust_scatter)), 0.0)
            )
        self.host.set_sensors(instruments, thrust)

    def _respond_to_commands(self):
        command = self.host.engine_throttles
        if command is None:
            return
        instruments = self.host.environment.instruments
        ceiling = get_max_density_thrust(instruments.ambient_density)
        correction = convert_to_gross_thrust(1.0, instruments.mach_number)
        self.thrust = EngineData(
            command.throttle_engine1 / 100.0 * ceiling / correction,
            command.throttle_engine2 / 100.0 * ceiling / correction,
        )

    def run(self, until: float) -> list[Snapshot]:
        """Run the scenario until ``until`` seconds of simulated time."""
        logger.info("Running climb simulation for %.1f s", until)
        self.env.run(until=until)
        if self.gauge.recorder is not None:
            self.gauge.recorder.flush()
        return self.snapshots

    @property
    def current_state(self) -> dict:
        return self.snapshots[-1].to_record() if self.snapshots else {}
