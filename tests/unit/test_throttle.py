"""Unit tests for throttle types and mode selection."""

import pytest

from fadec.control.throttle import (
    AXIS_MAX,
    AXIS_MIN,
    CLIMB_DETENT,
    ThrottleAxis,
    ThrottleMode,
    ThrottlePercent,
    ThrustValue,
    calculate_throttle_position,
    select_throttle_mode,
)


class TestThrottleAxis:
    def test_clamped_on_construction(self):
        assert ThrottleAxis(20000).value == AXIS_MAX
        assert ThrottleAxis(-20000).value == AXIS_MIN

    def test_from_raw_unsigned(self):
        assert ThrottleAxis.from_raw_unsigned(0) == ThrottleAxis.MIN
        assert ThrottleAxis.from_raw_unsigned(8192).value == 0.0
        assert ThrottleAxis.from_raw_unsigned(16384) == ThrottleAxis.MAX

    def test_ratio_round_trip_endpoints(self):
        assert ThrottleAxis.from_ratio(0.0) == ThrottleAxis.MIN
        assert ThrottleAxis.from_ratio(0.5).value == 0.0
        assert ThrottleAxis.from_ratio(1.0) == ThrottleAxis.MAX
        assert ThrottleAxis.MAX.to_ratio() == 1.0

    def test_inc_and_dec(self):
        assert ThrottleAxis(0).inc().value == 256.0
        assert ThrottleAxis(0).dec().value == -256.0
        assert ThrottleAxis.MAX.inc() == ThrottleAxis.MAX
        assert ThrottleAxis.MIN.dec() == ThrottleAxis.MIN

    def test_normalize_cruise(self):
        assert ThrottleAxis.MIN.normalize_cruise() == 0.0
        assert ThrottleAxis.CRUISE_MAX.normalize_cruise() == pytest.approx(1.0)

    def test_climb_detent(self):
        assert CLIMB_DETENT == 12030.0
        assert ThrottleAxis.CLIMB.value == 12030.0

    def test_ordering(self):
        assert ThrottleAxis.MIN < ThrottleAxis.CRUISE_MAX < ThrottleAxis.MAX


class TestThrottlePercent:
    def test_clamped(self):
        assert ThrottlePercent(150).value == 100.0
        assert ThrottlePercent(-1).value == 0.0
        assert ThrottlePercent.from_ratio(1.5) == ThrottlePercent.MAX

    def test_from_axis(self):
        assert ThrottlePercent.from_axis(ThrottleAxis.MIN).value == 0.0
        assert ThrottlePercent.from_axis(ThrottleAxis(0)).value == pytest.approx(50.0)

    def test_to_axis(self):
        assert ThrottlePercent(100).to_axis() == ThrottleAxis.MAX
        assert float(ThrottlePercent(25)) == 25.0


class TestThrustValue:
    def test_clamped(self):
        assert ThrustValue(-5).value == 0.0
        assert ThrustValue(5000).value == 3600.0

    def test_ratio(self):
        assert ThrustValue.from_ratio(0.5).value == 1800.0
        assert ThrustValue(900).to_ratio() == 0.25


class TestModeSelection:
    @pytest.mark.parametrize("axis, mode", [
        (-16384, ThrottleMode.UNDEFINED),
        (-15250, ThrottleMode.UNDEFINED),
        (-15249, ThrottleMode.CRUISE),
        (0, ThrottleMode.CRUISE),
        (9060, ThrottleMode.CRUISE),
        (9061, ThrottleMode.CLIMB),
        (12030, ThrottleMode.CLIMB),
        (15000, ThrottleMode.CLIMB),
        (15001, ThrottleMode.TAKEOFF),
        (16384, ThrottleMode.TAKEOFF),
    ])
    def test_band_boundaries(self, axis, mode):
        assert select_throttle_mode(ThrottleAxis(axis)) is mode

    def test_monotonic_over_full_travel(self):
        previous = -1
        for raw in range(-16384, 16385, 16):
            ordinal = select_throttle_mode(ThrottleAxis(raw)).ordinal
            assert ordinal >= previous
            previous = ordinal

    def test_mode_indicator_values(self):
        assert [float(m) for m in ThrottleMode] == [0.0, 1.0, 2.0, 3.0]
        assert str(ThrottleMode.CLIMB) == "CLB"


class TestVisualPosition:
    def test_takeoff_pinned_to_full(self):
        pos = calculate_throttle_position(ThrottleMode.TAKEOFF, ThrottleAxis(15500))
        assert pos == ThrottlePercent.MAX

    def test_climb_pinned_to_detent(self):
        pos = calculate_throttle_position(ThrottleMode.CLIMB, ThrottleAxis(9500))
        assert pos.value == pytest.approx((12030 + 16384) / 32768 * 100)

    def test_cruise_follows_lever(self):
        axis = ThrottleAxis(-8192)
        pos = calculate_throttle_position(ThrottleMode.CRUISE, axis)
        assert pos.value == pytest.approx(25.0)

    def test_undefined_follows_lever(self):
        pos = calculate_throttle_position(ThrottleMode.UNDEFINED, ThrottleAxis.MIN)
        assert pos == ThrottlePercent.MIN
