"""Gauge lifecycle manager.

Owns the process-wide FADEC gauge, its in-memory host and the optional
flight data recorder.  An asyncio background task calls the gauge at the
host draw rate; HTTP routes queue lever events and replace sensor values
between draws.
"""

import asyncio
import logging
from typing import Any

from backend.core.config import settings
from fadec.core.engines import EngineData
from fadec.core.events import ThrottleEvent
from fadec.core.gauge import FdGauge
from fadec.core.host import InMemoryHost
from fadec.core.recorder import FlightDataRecorder
from fadec.core.state import Instruments

logger = logging.getLogger(__name__)


class GaugeService:
    """Singleton wrapper that runs the gauge as a background task."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._task = None
            cls._instance._build()
        return cls._instance

    def _build(self):
        self.host = InMemoryHost()
        recorder = None
        if settings.RECORDER_ENABLED:
            recorder = FlightDataRecorder(
                directory=settings.RECORDER_DIR,
                buffer_size=settings.RECORDER_BUFFER_SIZE,
                max_events_per_file=settings.RECORDER_MAX_EVENTS_PER_FILE,
            )
        self.gauge = FdGauge(
            self.host,
            enabled=settings.FADEC_ENABLED,
            update_interval_s=settings.update_interval_s,
            reset_pid_on_mode_change=settings.RESET_PID_ON_MODE_CHANGE,
            recorder=recorder,
        )

    def reset(self):
        """Discard the gauge and start over with fresh controllers."""
        if self.gauge.recorder is not None:
            self.gauge.recorder.close()
        self._build()
        logger.info("Gauge reset")

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self):
        if self.running:
            return
        self._task = asyncio.create_task(self.run_loop())

    async def stop(self):
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        if self.gauge.recorder is not None:
            self.gauge.recorder.close()

    async def restart(self):
        """Reset the gauge, keeping the draw loop running if it was."""
        was_running = self.running
        await self.stop()
        self.reset()
        if was_running:
            await self.start()

    async def run_loop(self):
        """Host draw loop: one gauge call per draw interval."""
        logger.info("Gauge loop started (draw=%.4f s, update=%.3f s)",
                    settings.DRAW_INTERVAL_S, settings.update_interval_s)
        try:
            while True:
                try:
                    self.gauge.on_update()
                except Exception as e:
                    # The tick is retried on the next draw
                    logger.exception("Gauge update failed: %s", e)
                await asyncio.sleep(settings.DRAW_INTERVAL_S)
        except asyncio.CancelledError:
            logger.info("Gauge loop cancelled")
            raise

    def queue_event(self, event: ThrottleEvent) -> int:
        self.gauge.queue_event(event)
        return self.gauge.pending_events

    def set_sensors(self, values: dict[str, float]):
        """Replace instrument and thrust readings for the next control step."""
        values = dict(values)
        thrust = EngineData(values.pop("engine1_thrust"), values.pop("engine2_thrust"))
        self.host.set_sensors(Instruments(**values), thrust)

    def set_enabled(self, enabled: bool):
        self.gauge.set_enabled(enabled)

    def get_state(self) -> dict[str, Any]:
        snapshot = self.gauge.last_snapshot
        state: dict[str, Any] = {
            "enabled": self.gauge.enabled,
            "steps": self.gauge.steps,
            "simulation_time": round(snapshot.sim_time, 3) if snapshot else None,
        }
        for engine, data in self.gauge.aircraft.engines.items():
            state[engine.value] = data.get_state()
        return state
