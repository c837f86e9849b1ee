"""Tests for the gauge service and HTTP routes."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from backend.main import app
from backend.services.gauge_manager import GaugeService
from fadec.control.throttle import ThrottleAxis, ThrottleMode
from fadec.core.events import ThrottleEvent, ThrottleEventType


@pytest.fixture
def service():
    service = GaugeService()
    service.reset()
    return service


@pytest.fixture
def client(service):
    # No context manager: the lifespan loop stays off and tests step manually
    return TestClient(app)


class TestGaugeService:
    def test_singleton(self, service):
        assert GaugeService() is service

    def test_queue_event(self, service):
        assert service.queue_event(ThrottleEvent(ThrottleEventType.THROTTLE_FULL)) == 1
        service.gauge.dispatch()
        assert service.gauge.throttle_axes.engine1 == ThrottleAxis.MAX

    def test_set_sensors(self, service):
        service.set_sensors({
            "mach_number": 0.3,
            "ambient_density": 0.002,
            "pressure_altitude": 5000.0,
            "geometric_altitude": 5100.0,
            "airspeed_indicated": 180.0,
            "airspeed_true": 195.0,
            "vertical_speed": 1500.0,
            "engine1_thrust": 1000.0,
            "engine2_thrust": 1100.0,
        })
        environment = service.host.read_environment()
        assert environment.instruments.pressure_altitude == 5000.0
        assert environment.engines.engine2.thrust == 1100.0

    def test_get_state_before_first_step(self, service):
        state = service.get_state()
        assert state["steps"] == 0
        assert state["simulation_time"] is None
        assert state["engine1"]["fadec_mode"] == "UNDEF"

    def test_run_loop_steps_gauge(self, service):
        async def run():
            await service.start()
            assert service.running
            await asyncio.sleep(0.3)
            await service.stop()

        asyncio.run(run())
        assert not service.running
        assert service.gauge.steps >= 1

    def test_run_loop_survives_extreme_sensors(self, service):
        service.queue_event(ThrottleEvent(ThrottleEventType.AXIS_THROTTLE_SET, 12030))
        service.set_sensors({
            "mach_number": 1e100,
            "ambient_density": 0.002,
            "pressure_altitude": 5000.0,
            "geometric_altitude": 5000.0,
            "airspeed_indicated": 180.0,
            "airspeed_true": 195.0,
            "vertical_speed": 1500.0,
            "engine1_thrust": 1000.0,
            "engine2_thrust": 1000.0,
        })

        async def run():
            await service.start()
            await asyncio.sleep(0.3)
            assert service.running
            await service.stop()

        asyncio.run(run())
        assert service.gauge.steps >= 1
        assert service.host.engine_throttles is not None

    def test_run_loop_survives_failed_update(self, service, monkeypatch):
        on_update = service.gauge.on_update
        calls = []

        def flaky():
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("draw failed")
            return on_update()

        monkeypatch.setattr(service.gauge, "on_update", flaky)

        async def run():
            await service.start()
            await asyncio.sleep(0.3)
            assert service.running
            await service.stop()

        asyncio.run(run())
        assert len(calls) > 1
        assert service.gauge.steps >= 1

    def test_restart_keeps_stopped_loop_stopped(self, service):
        service.gauge.update(0.05)
        old_gauge = service.gauge
        asyncio.run(service.restart())
        assert not service.running
        assert service.gauge is not old_gauge
        assert service.gauge.steps == 0

    def test_restart_resumes_running_loop(self, service):
        async def run():
            await service.start()
            old_gauge = service.gauge
            await service.restart()
            assert service.running
            assert service.gauge is not old_gauge
            await service.stop()

        asyncio.run(run())


class TestRoutes:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_queue_event(self, client, service):
        response = client.post(
            "/api/v1/gauge/events",
            json={"event_type": "AXIS_THROTTLE1_SET", "data": 12030},
        )
        assert response.status_code == 200
        assert response.json() == {"queued": True, "pending_events": 1}
        service.gauge.dispatch()
        assert service.gauge.throttle_axes.engine1 == ThrottleAxis.CLIMB

    def test_unknown_event_rejected(self, client):
        response = client.post("/api/v1/gauge/events", json={"event_type": "GEAR_UP"})
        assert response.status_code == 422

    def test_update_sensors(self, client, service):
        response = client.put(
            "/api/v1/gauge/sensors",
            json={"mach_number": 0.45, "pressure_altitude": 12000.0, "engine1_thrust": 1800.0},
        )
        assert response.status_code == 200
        environment = service.host.read_environment()
        assert environment.instruments.mach_number == 0.45
        assert environment.engines.engine1.thrust == 1800.0
        assert environment.engines.engine2.thrust == 0.0

    def test_negative_thrust_rejected(self, client):
        response = client.put("/api/v1/gauge/sensors", json={"engine1_thrust": -5.0})
        assert response.status_code == 422

    def test_state_after_step(self, client, service):
        client.post("/api/v1/gauge/events", json={"event_type": "THROTTLE_FULL"})
        service.gauge.dispatch()
        service.gauge.update(0.05, sim_time=2.0)

        response = client.get("/api/v1/gauge/state")
        assert response.status_code == 200
        state = response.json()
        assert state["steps"] == 1
        assert state["simulation_time"] == 2.0
        assert state["engine1"]["fadec_mode"] == ThrottleMode.TAKEOFF.value
        assert state["engine2"]["engine_throttle"] == 100.0

    def test_toggle_fadec(self, client, service):
        response = client.post("/api/v1/controls/fadec", json={"enabled": False})
        assert response.status_code == 200
        assert response.json()["enabled"] is False
        assert not service.gauge.enabled

    def test_reset(self, client, service):
        service.gauge.update(0.05)
        response = client.post("/api/v1/controls/reset")
        assert response.status_code == 200
        assert GaugeService().gauge.steps == 0

    def test_non_finite_sensor_rejected(self, client, service):
        response = client.put(
            "/api/v1/gauge/sensors",
            content='{"mach_number": Infinity}',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422
        assert service.host.read_environment().instruments.mach_number == 0.0

    def test_reset_with_running_loop(self, service):
        with TestClient(app) as client:
            assert service.running
            old_gauge = service.gauge
            response = client.post("/api/v1/controls/reset")
            assert response.status_code == 200
            assert response.json() == {"status": "reset", "running": True}
            assert service.running
            assert service.gauge is not old_gauge
        assert not service.running
