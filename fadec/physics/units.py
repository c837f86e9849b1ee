"""Unit conversion helpers for the FADEC control law.

The control law works in the imperial units the engine data is published
in (poundal, slug/ft3, foot, second).  Values cross the boundary as plain
floats with the unit carried in the name; convert here, never inline.
"""

# Exact conversion factors
FOOT_M = 0.3048                    # m per ft
SLUG_KG = 14.593902937206364       # kg per slug
SLUG_FT3_KG_M3 = SLUG_KG / FOOT_M ** 3  # kg/m3 per slug/ft3
KNOT_M_S = 1852.0 / 3600.0         # m/s per kt


def percent(value: float) -> float:
    """Percent -> dimensionless ratio."""
    return value / 100.0


def to_percent(ratio: float) -> float:
    """Dimensionless ratio -> percent."""
    return ratio * 100.0


def feet_to_meters(ft: float) -> float:
    return ft * FOOT_M


def kg_m3_to_slug_ft3(rho: float) -> float:
    return rho / SLUG_FT3_KG_M3


def slug_ft3_to_kg_m3(rho: float) -> float:
    return rho * SLUG_FT3_KG_M3


def knots_to_m_s(kt: float) -> float:
    return kt * KNOT_M_S


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value to the inclusive range [low, high]."""
    return max(low, min(high, value))
