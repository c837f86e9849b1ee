"""Throttle lever, throttle command and thrust value types.

The physical lever reports a bidirectional axis in [-16384, 16384].  The
axis range is split into detent bands that select the FADEC mode:

    Undefined  <= -15250 <  Cruise  <= 9060 <  Climb  <= 15000 <  Takeoff

Every constructor clamps, so a value of any of these types is always
inside its documented range.
"""

from dataclasses import dataclass
from enum import Enum

from fadec.physics.units import clamp, percent, to_percent

AXIS_MIN = -16384.0
AXIS_MAX = 16384.0
AXIS_RANGE = AXIS_MAX - AXIS_MIN
AXIS_STEP = 256.0                 # increment/decrement event size

UNDEF_MAX = -15250.0
CRUISE_MAX = 9060.0               # visually, 6360 looks better as the boundary
CRUISE_RANGE = CRUISE_MAX - AXIS_MIN
CLIMB_MAX = 15000.0
CLIMB_DETENT = (CLIMB_MAX - CRUISE_MAX) / 2.0 + CRUISE_MAX
TAKEOFF_DETENT = AXIS_MAX

THRUST_MIN_PDL = 0.0
THRUST_MAX_PDL = 3600.0

PERCENT_MIN = 0.0
PERCENT_MAX = 100.0


class ThrottleMode(str, Enum):
    """FADEC throttle mode, selected by the lever detent."""
    UNDEFINED = "UNDEF"
    CRUISE = "CRU"
    CLIMB = "CLB"
    TAKEOFF = "TO"

    @property
    def ordinal(self) -> int:
        return _MODE_ORDER.index(self)

    def __float__(self) -> float:
        # Mode indicator value published to the host
        return float(self.ordinal)

    def __str__(self) -> str:
        return self.value


_MODE_ORDER = [
    ThrottleMode.UNDEFINED,
    ThrottleMode.CRUISE,
    ThrottleMode.CLIMB,
    ThrottleMode.TAKEOFF,
]


@dataclass(frozen=True, order=True)
class ThrottleAxis:
    """Raw lever axis position, clamped to [-16384, 16384]."""
    value: float = AXIS_MIN

    def __post_init__(self):
        object.__setattr__(self, "value", clamp(float(self.value), AXIS_MIN, AXIS_MAX))

    @classmethod
    def from_raw(cls, value: float) -> "ThrottleAxis":
        return cls(value)

    @classmethod
    def from_raw_unsigned(cls, value: int) -> "ThrottleAxis":
        """Map an unsigned 0..16384 throttle value onto the signed axis."""
        return cls(value * 2.0 + AXIS_MIN)

    @classmethod
    def from_ratio(cls, ratio: float) -> "ThrottleAxis":
        return cls(AXIS_MIN + ratio * AXIS_RANGE)

    def inc(self) -> "ThrottleAxis":
        return ThrottleAxis(self.value + AXIS_STEP)

    def dec(self) -> "ThrottleAxis":
        return ThrottleAxis(self.value - AXIS_STEP)

    def to_ratio(self) -> float:
        """Position as a fraction of the full lever travel."""
        return (self.value - AXIS_MIN) / AXIS_RANGE

    def normalize_cruise(self) -> float:
        """Position as a fraction of the travel up to the cruise detent."""
        return (self.value - AXIS_MIN) / CRUISE_RANGE

    def __str__(self) -> str:
        return f"{self.value:.1f}"


@dataclass(frozen=True, order=True)
class ThrottlePercent:
    """Engine-facing throttle command in percent, clamped to [0, 100]."""
    value: float = PERCENT_MIN

    def __post_init__(self):
        object.__setattr__(self, "value", clamp(float(self.value), PERCENT_MIN, PERCENT_MAX))

    @classmethod
    def from_ratio(cls, ratio: float) -> "ThrottlePercent":
        return cls(to_percent(ratio))

    @classmethod
    def from_axis(cls, axis: ThrottleAxis) -> "ThrottlePercent":
        return cls.from_ratio(axis.to_ratio())

    def to_ratio(self) -> float:
        return percent(self.value)

    def to_axis(self) -> ThrottleAxis:
        return ThrottleAxis.from_ratio(self.to_ratio())

    def __float__(self) -> float:
        return self.value

    def __str__(self) -> str:
        return f"{self.value:.3f} pct"


@dataclass(frozen=True, order=True)
class ThrustValue:
    """Thrust magnitude in poundal, clamped to [0, 3600]."""
    value: float = THRUST_MIN_PDL

    def __post_init__(self):
        object.__setattr__(self, "value", clamp(float(self.value), THRUST_MIN_PDL, THRUST_MAX_PDL))

    @classmethod
    def from_force(cls, thrust_pdl: float) -> "ThrustValue":
        return cls(thrust_pdl)

    @classmethod
    def from_ratio(cls, ratio: float) -> "ThrustValue":
        return cls(ratio * THRUST_MAX_PDL + THRUST_MIN_PDL)

    def to_ratio(self) -> float:
        return (self.value - THRUST_MIN_PDL) / (THRUST_MAX_PDL - THRUST_MIN_PDL)

    def __float__(self) -> float:
        return self.value

    def __str__(self) -> str:
        return f"{self.value:.3f} pdl"


ThrottleAxis.MIN = ThrottleAxis(AXIS_MIN)
ThrottleAxis.MAX = ThrottleAxis(AXIS_MAX)
ThrottleAxis.UNDEF_MAX = ThrottleAxis(UNDEF_MAX)
ThrottleAxis.CRUISE_MAX = ThrottleAxis(CRUISE_MAX)
ThrottleAxis.CLIMB_MAX = ThrottleAxis(CLIMB_MAX)
ThrottleAxis.CLIMB = ThrottleAxis(CLIMB_DETENT)
ThrottleAxis.TAKEOFF = ThrottleAxis(TAKEOFF_DETENT)

ThrottlePercent.MIN = ThrottlePercent(PERCENT_MIN)
ThrottlePercent.MAX = ThrottlePercent(PERCENT_MAX)

ThrustValue.MIN = ThrustValue(THRUST_MIN_PDL)
ThrustValue.MAX = ThrustValue(THRUST_MAX_PDL)


def select_throttle_mode(axis: ThrottleAxis) -> ThrottleMode:
    """Classify a lever position into its FADEC mode.

    Stateless: the lever detents carry the mode, so the same axis value
    always yields the same mode.  There is no hysteresis band; a noisy
    axis hovering on a boundary will alternate between adjacent modes.
    """
    if axis.value > CLIMB_MAX:
        return ThrottleMode.TAKEOFF
    if axis.value > CRUISE_MAX:
        return ThrottleMode.CLIMB
    if axis.value > UNDEF_MAX:
        return ThrottleMode.CRUISE
    return ThrottleMode.UNDEFINED


def calculate_throttle_position(mode: ThrottleMode, axis: ThrottleAxis) -> ThrottlePercent:
    """Visual lever position shown in the cockpit.

    Takeoff and climb pin the lever to their detents regardless of what
    the FADEC is commanding; cruise and undefined follow the raw axis.
    """
    if mode is ThrottleMode.TAKEOFF:
        target = ThrottleAxis.TAKEOFF
    elif mode is ThrottleMode.CLIMB:
        target = ThrottleAxis.CLIMB
    else:
        target = axis
    return ThrottlePercent.from_axis(target)
