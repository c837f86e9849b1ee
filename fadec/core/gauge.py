"""FADEC gauge: the per-tick driver that connects the host to the controllers.

Called once per host draw/update event.  Every call drains the pending
lever events; the control step itself only runs once more than
``update_interval_s`` has elapsed since the previous step, and it is
given the true elapsed time so PID integration stays correct under an
irregular call cadence.
"""

import logging
import math
import time
from collections import deque
from dataclasses import astuple
from typing import Callable

from fadec.control.fadec_controller import FadecController
from fadec.control.throttle import (
    ThrottleAxis,
    calculate_throttle_position,
    select_throttle_mode,
)
from fadec.core.engines import EngineData, EngineNumber
from fadec.core.events import ThrottleEvent, apply_throttle_event
from fadec.core.host import EngineDataControl, HostInterface, HostInterfaceError
from fadec.core.recorder import FlightDataRecorder
from fadec.core.state import Aircraft, Engine, Environment, Snapshot

logger = logging.getLogger(__name__)

UPDATE_INTERVAL_S = 0.050


def _is_finite(environment: Environment) -> bool:
    values = list(astuple(environment.instruments))
    values.extend(readings.thrust for readings in environment.engines)
    return all(math.isfinite(v) for v in values)


class FdGauge:
    """Drives both engines' FADEC controllers against a host interface."""

    def __init__(
        self,
        host: HostInterface,
        enabled: bool = True,
        update_interval_s: float = UPDATE_INTERVAL_S,
        reset_pid_on_mode_change: bool = False,
        recorder: FlightDataRecorder | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.host = host
        self.update_interval_s = update_interval_s
        self.recorder = recorder
        self._clock = clock

        self.aircraft = Aircraft(
            engines=EngineData.new_from(
                lambda _: Engine(
                    fadec=FadecController(
                        enabled=enabled,
                        reset_on_mode_change=reset_pid_on_mode_change,
                    )
                )
            )
        )
        self.throttle_axes: EngineData[ThrottleAxis] = EngineData.new(ThrottleAxis.MIN)
        self._events: deque[ThrottleEvent] = deque()
        self._environment = Environment()

        self._start_time = clock()
        self._last_update = self._start_time
        self.last_snapshot: Snapshot | None = None
        self.steps = 0

    @property
    def enabled(self) -> bool:
        return all(engine.fadec.enabled for engine in self.aircraft.engines)

    def set_enabled(self, enabled: bool):
        """Toggle between feedback control and the raw lever curve."""
        for engine in self.aircraft.engines:
            engine.fadec.enabled = enabled
        logger.info("FADEC %s", "enabled" if enabled else "disabled")

    def queue_event(self, event: ThrottleEvent):
        self._events.append(event)

    @property
    def pending_events(self) -> int:
        return len(self._events)

    def dispatch(self) -> int:
        """Apply every pending lever event; returns how many were applied."""
        count = 0
        while self._events:
            event = self._events.popleft()
            self.throttle_axes = apply_throttle_event(self.throttle_axes, event)
            count += 1
        if count:
            logger.debug(
                "Applied %d throttle event(s): %s %s",
                count, self.throttle_axes.engine1, self.throttle_axes.engine2,
            )
        return count

    def on_update(self) -> Snapshot | None:
        """Host draw callback; returns a snapshot when a control step ran."""
        now = self._clock()
        self.dispatch()

        elapsed = now - self._last_update
        if elapsed <= self.update_interval_s:
            return None

        snapshot = self.update(elapsed, sim_time=now - self._start_time)
        self._last_update = now
        return snapshot

    def update(self, delta_t: float, sim_time: float | None = None) -> Snapshot:
        """Run one control step for both engines."""
        environment = self._read_environment()
        instruments = environment.instruments

        for engine_number in EngineNumber:
            engine = self.aircraft.engines[engine_number]
            axis = self.throttle_axes[engine_number]
            mode = select_throttle_mode(axis)
            if mode is not engine.mode:
                logger.debug("%s: updating mode to %s", engine_number.value, mode)

            try:
                result = engine.fadec.get_desired_throttle(
                    axis,
                    mode,
                    environment.engines[engine_number].thrust,
                    instruments.mach_number,
                    instruments.ambient_density,
                    instruments.pressure_altitude,
                    delta_t,
                )
            except (ValueError, ArithmeticError) as e:
                # One engine failing holds its last command; the other still runs
                logger.error(
                    "%s: control step failed, holding %s: %s",
                    engine_number.value, engine.engine_throttle, e,
                )
            else:
                engine.engine_throttle = result.throttle

            engine.mode = mode
            engine.physical_throttle = axis
            engine.visual_throttle = calculate_throttle_position(mode, axis)

            self._send("mode", self.host.set_mode, engine_number, mode)
            self._send(
                "visual throttle",
                self.host.set_visual_throttle,
                engine_number,
                engine.visual_throttle,
            )

        update = EngineDataControl.from_engine_data(
            self.aircraft.engines.map(lambda _, e: e.engine_throttle)
        )
        self._send("engine throttles", self.host.update_engine_throttles, update)

        self.steps += 1
        if sim_time is None:
            sim_time = self._clock() - self._start_time
        snapshot = Snapshot.capture(sim_time, delta_t, environment, self.aircraft)
        self.last_snapshot = snapshot
        if self.recorder is not None:
            self.recorder.publish(snapshot)
        return snapshot

    def _read_environment(self) -> Environment:
        try:
            environment = self.host.read_environment()
        except HostInterfaceError as e:
            logger.warning("Error reading host sensors, reusing last readings: %s", e)
            return self._environment

        if not _is_finite(environment):
            logger.warning("Non-finite host sensor reading, reusing last readings: %s", environment)
            return self._environment
        self._environment = environment
        return self._environment

    def _send(self, what: str, command: Callable, *args) -> bool:
        # Controller state has already advanced; a lost command is not retried
        try:
            command(*args)
        except HostInterfaceError as e:
            logger.warning("Error updating host %s: %s", what, e)
            return False
        return True
