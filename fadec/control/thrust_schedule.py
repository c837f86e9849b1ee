"""Climb thrust scheduling.

Climb thrust is held against an altitude- and density-dependent target:

    ceiling   = (density * 1351600 pdl/(slug/ft3) + 250 pdl) * 93 %
    floor     = 2050 pdl + 1/24 pdl per ft below 7000 ft
    taper     = 1/64 pdl per ft above 35000 ft, at most 110 pdl
    target    = ceiling - taper   if ceiling < floor
                floor             otherwise

Measured thrust is corrected for compressibility to a gross thrust before
it is compared with the target.
"""

from fadec.physics.units import clamp

THRUST_EFFICIENCY = 0.93

BASE_THRUST_PDL = 2050.0

DENSITY_FACTOR = 1351.6 * 1000.0       # pdl per slug/ft3
DENSITY_OFFSET_PDL = 250.0

LOW_ALTITUDE_CEILING_FT = 7000.0
LOW_ALTITUDE_GAIN_PDL_PER_FT = 1.0 / 24.0   # (1 lb/s) / (24 s)

HIGH_ALTITUDE_FLOOR_FT = 35000.0
HIGH_ALTITUDE_LOSS_PDL_PER_FT = 1.0 / 64.0  # (1 lb/s) / (64 s)
MAX_HIGH_ALTITUDE_LOSS_PDL = 110.0


def convert_to_gross_thrust(thrust_pdl: float, mach: float) -> float:
    """Correct a measured static thrust for airspeed (compressible flow)."""
    return thrust_pdl * (1.0 + mach ** 2 / 5.0) ** 3.5


def get_max_density_thrust(density_slug_ft3: float) -> float:
    """Rated thrust ceiling (pdl) at the given ambient density."""
    return density_slug_ft3 * DENSITY_FACTOR + DENSITY_OFFSET_PDL


def calculate_low_altitude_thrust_gain(pressure_altitude_ft: float) -> float:
    if pressure_altitude_ft > LOW_ALTITUDE_CEILING_FT:
        return 0.0

    altitude_reduction = LOW_ALTITUDE_CEILING_FT - pressure_altitude_ft
    return max(altitude_reduction * LOW_ALTITUDE_GAIN_PDL_PER_FT, 0.0)


def calculate_high_altitude_thrust_loss(pressure_altitude_ft: float) -> float:
    if pressure_altitude_ft < HIGH_ALTITUDE_FLOOR_FT:
        return 0.0

    altitude_excess = pressure_altitude_ft - HIGH_ALTITUDE_FLOOR_FT
    return clamp(
        altitude_excess * HIGH_ALTITUDE_LOSS_PDL_PER_FT,
        0.0,
        MAX_HIGH_ALTITUDE_LOSS_PDL,
    )


def calculate_climb_thrust_target(density_slug_ft3: float, pressure_altitude_ft: float) -> float:
    """Gross thrust (pdl) the climb PID should hold."""
    max_effective_thrust = get_max_density_thrust(density_slug_ft3) * THRUST_EFFICIENCY
    low_altitude_target = BASE_THRUST_PDL + calculate_low_altitude_thrust_gain(pressure_altitude_ft)

    if max_effective_thrust < low_altitude_target:
        return max_effective_thrust - calculate_high_altitude_thrust_loss(pressure_altitude_ft)
    return low_altitude_target
