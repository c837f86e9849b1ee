"""International Standard Atmosphere (troposphere and lower stratosphere).

Supplies consistent density, pressure altitude and Mach readings to the
scenario runner.  Valid from sea level to 20 km geopotential altitude;
inputs above that are evaluated with the isothermal layer.

All functions accept scalars or numpy arrays.
"""

import numpy as np

from fadec.physics.units import feet_to_meters, kg_m3_to_slug_ft3, knots_to_m_s

T0 = 288.15             # K, sea level temperature
P0 = 101_325.0          # Pa, sea level pressure
LAPSE_RATE = 0.0065     # K/m
G0 = 9.80665            # m/s2
RD = 287.052_87         # J/(kg K), dry air
GAMMA = 1.4

TROPOPAUSE_M = 11_000.0
T_TROPOPAUSE = T0 - LAPSE_RATE * TROPOPAUSE_M                       # 216.65 K
P_TROPOPAUSE = P0 * (T_TROPOPAUSE / T0) ** (G0 / (RD * LAPSE_RATE))  # ~22632 Pa


def temperature(altitude_m):
    """Static air temperature (K) at a geopotential altitude."""
    h = np.asarray(altitude_m, dtype=float)
    return np.where(h < TROPOPAUSE_M, T0 - LAPSE_RATE * h, T_TROPOPAUSE)


def pressure(altitude_m):
    """Static pressure (Pa) at a geopotential altitude."""
    h = np.asarray(altitude_m, dtype=float)
    troposphere = P0 * (1.0 - LAPSE_RATE * h / T0) ** (G0 / (RD * LAPSE_RATE))
    stratosphere = P_TROPOPAUSE * np.exp(-G0 * (h - TROPOPAUSE_M) / (RD * T_TROPOPAUSE))
    return np.where(h < TROPOPAUSE_M, troposphere, stratosphere)


def density(altitude_m):
    """Air density (kg/m3) at a geopotential altitude."""
    return pressure(altitude_m) / (RD * temperature(altitude_m))


def pressure_altitude(pressure_pa):
    """Altitude (m) at which the standard atmosphere has ``pressure_pa``."""
    p = np.asarray(pressure_pa, dtype=float)
    troposphere = T0 / LAPSE_RATE * (1.0 - (p / P0) ** (RD * LAPSE_RATE / G0))
    stratosphere = TROPOPAUSE_M - RD * T_TROPOPAUSE / G0 * np.log(p / P_TROPOPAUSE)
    return np.where(p > P_TROPOPAUSE, troposphere, stratosphere)


def speed_of_sound(altitude_m):
    """Speed of sound (m/s) at a geopotential altitude."""
    return np.sqrt(GAMMA * RD * temperature(altitude_m))


def density_slug_ft3(altitude_ft: float) -> float:
    return float(kg_m3_to_slug_ft3(density(feet_to_meters(altitude_ft))))


def mach_number(true_airspeed_kt: float, altitude_ft: float) -> float:
    return float(knots_to_m_s(true_airspeed_kt) / speed_of_sound(feet_to_meters(altitude_ft)))
