"""Throttle lever events delivered by the host simulator.

Events address both engines or a single engine.  Applying an event is a
pure function of the current lever pair; the gauge queues events and
drains them all before a control step runs.
"""

from dataclasses import dataclass
from enum import Enum

from fadec.control.throttle import ThrottleAxis
from fadec.core.engines import EngineData, EngineNumber


class ThrottleEventType(str, Enum):
    AXIS_THROTTLE_SET = "AXIS_THROTTLE_SET"
    AXIS_THROTTLE_SET_EX = "AXIS_THROTTLE_SET_EX1"
    AXIS_THROTTLE1_SET = "AXIS_THROTTLE1_SET"
    AXIS_THROTTLE1_SET_EX = "AXIS_THROTTLE1_SET_EX1"
    AXIS_THROTTLE2_SET = "AXIS_THROTTLE2_SET"
    AXIS_THROTTLE2_SET_EX = "AXIS_THROTTLE2_SET_EX1"
    THROTTLE_SET = "THROTTLE_SET"
    THROTTLE1_SET = "THROTTLE1_SET"
    THROTTLE2_SET = "THROTTLE2_SET"
    THROTTLE_FULL = "THROTTLE_FULL"
    THROTTLE1_FULL = "THROTTLE1_FULL"
    THROTTLE2_FULL = "THROTTLE2_FULL"
    THROTTLE_CUT = "THROTTLE_CUT"
    THROTTLE1_CUT = "THROTTLE1_CUT"
    THROTTLE2_CUT = "THROTTLE2_CUT"
    THROTTLE_INCR = "THROTTLE_INCR"
    INCREASE_THROTTLE = "INCREASE_THROTTLE"
    THROTTLE1_INCR = "THROTTLE1_INCR"
    THROTTLE2_INCR = "THROTTLE2_INCR"
    THROTTLE_DECR = "THROTTLE_DECR"
    DECREASE_THROTTLE = "DECREASE_THROTTLE"
    THROTTLE1_DECR = "THROTTLE1_DECR"
    THROTTLE2_DECR = "THROTTLE2_DECR"


_E = ThrottleEventType

# event -> (engines addressed, action)
_EVENT_TABLE = {
    _E.AXIS_THROTTLE_SET: (None, "axis"),
    _E.AXIS_THROTTLE_SET_EX: (None, "axis"),
    _E.AXIS_THROTTLE1_SET: (EngineNumber.ENGINE1, "axis"),
    _E.AXIS_THROTTLE1_SET_EX: (EngineNumber.ENGINE1, "axis"),
    _E.AXIS_THROTTLE2_SET: (EngineNumber.ENGINE2, "axis"),
    _E.AXIS_THROTTLE2_SET_EX: (EngineNumber.ENGINE2, "axis"),
    _E.THROTTLE_SET: (None, "unsigned"),
    _E.THROTTLE1_SET: (EngineNumber.ENGINE1, "unsigned"),
    _E.THROTTLE2_SET: (EngineNumber.ENGINE2, "unsigned"),
    _E.THROTTLE_FULL: (None, "full"),
    _E.THROTTLE1_FULL: (EngineNumber.ENGINE1, "full"),
    _E.THROTTLE2_FULL: (EngineNumber.ENGINE2, "full"),
    _E.THROTTLE_CUT: (None, "cut"),
    _E.THROTTLE1_CUT: (EngineNumber.ENGINE1, "cut"),
    _E.THROTTLE2_CUT: (EngineNumber.ENGINE2, "cut"),
    _E.THROTTLE_INCR: (None, "inc"),
    _E.INCREASE_THROTTLE: (None, "inc"),
    _E.THROTTLE1_INCR: (EngineNumber.ENGINE1, "inc"),
    _E.THROTTLE2_INCR: (EngineNumber.ENGINE2, "inc"),
    _E.THROTTLE_DECR: (None, "dec"),
    _E.DECREASE_THROTTLE: (None, "dec"),
    _E.THROTTLE1_DECR: (EngineNumber.ENGINE1, "dec"),
    _E.THROTTLE2_DECR: (EngineNumber.ENGINE2, "dec"),
}


@dataclass(frozen=True)
class ThrottleEvent:
    event_type: ThrottleEventType
    data: int = 0


def _apply_action(action: str, axis: ThrottleAxis, data: int) -> ThrottleAxis:
    if action == "axis":
        # Signed axis values may arrive as their unsigned 32-bit encoding
        if data >= 2 ** 31:
            data -= 2 ** 32
        return ThrottleAxis.from_raw(data)
    if action == "unsigned":
        return ThrottleAxis.from_raw_unsigned(data)
    if action == "full":
        return ThrottleAxis.MAX
    if action == "cut":
        return ThrottleAxis.MIN
    if action == "inc":
        return axis.inc()
    return axis.dec()


def apply_throttle_event(
    axes: EngineData[ThrottleAxis], event: ThrottleEvent
) -> EngineData[ThrottleAxis]:
    """Return the lever pair after applying ``event``."""
    target, action = _EVENT_TABLE[event.event_type]
    if target is None:
        return axes.map(lambda _, axis: _apply_action(action, axis, event.data))
    return axes.replace(target, _apply_action(action, axes[target], event.data))
