"""
creatorcal.engines.solar
------------------------
Sunrise, solar noon and sunset (local clock hours) for a day of the Creator
year at a given latitude.

The sun is moved along the ecliptic at its mean rate starting from the March
equinox (`equinox_day`), which is where the Creator year begins. From that
longitude we take the declination (sin d = sin e * sin L), an obliquity-only
equation of time, and the hour angle from the spherical law of cosines.
Accuracy is a few minutes, which is far below the 80-minute part width.

Longitude and the UTC offset only shift the times; they do not enter the
geometry.
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

from ..core.types import SolarTimes

TROPICAL_YEAR_DAYS = 365.2422
OBLIQUITY_DEG = 23.44
H0_DEG = -0.833           # apparent altitude of the solar limb at rise/set


def wrap_deg(x: float) -> float:
    return x % 360.0


def ecliptic_longitude_deg(day_of_year: int, *, equinox_day: int = 1, year_days: float = TROPICAL_YEAR_DAYS) -> float:
    """Mean solar longitude (degrees) at local noon of `day_of_year`; 0 at the March equinox."""
    return wrap_deg(360.0 * (day_of_year - equinox_day) / year_days)


def solar_declination_deg(lon_deg: float, eps_deg: float = OBLIQUITY_DEG) -> float:
    sin_delta = math.sin(math.radians(eps_deg)) * math.sin(math.radians(lon_deg))
    return math.degrees(math.asin(sin_delta))


def equation_of_time_minutes(lon_deg: float, eps_deg: float = OBLIQUITY_DEG) -> float:
    """
    Obliquity term of the equation of time (minutes), EOT = 4 * (L - alpha).
    """
    lam = math.radians(lon_deg)
    eps = math.radians(eps_deg)
    # atan2 keeps the right ascension in the same quadrant as L
    alpha_deg = wrap_deg(math.degrees(math.atan2(math.cos(eps) * math.sin(lam), math.cos(lam))))
    diff_deg = wrap_deg(lon_deg - alpha_deg + 180.0) - 180.0
    return 4.0 * diff_deg


def hour_angle_deg(lat_deg: float, delta_deg: float, h0_deg: float = H0_DEG) -> Tuple[float, Optional[str]]:
    """
    Sunrise hour angle H0 in degrees [0, 180], plus a polar flag.
    Out-of-range cosines (polar day/night) are clamped instead of raised.
    """
    lat = math.radians(lat_deg)
    delta = math.radians(delta_deg)
    numerator = math.sin(math.radians(h0_deg)) - math.sin(lat) * math.sin(delta)
    denominator = math.cos(lat) * math.cos(delta)

    if denominator <= 1e-12:
        # At a pole the sun's altitude stays at +/- its declination all day.
        altitude = delta_deg if lat_deg > 0 else -delta_deg
        return (180.0, "day") if altitude > h0_deg else (0.0, "night")

    cos_H0 = numerator / denominator
    if cos_H0 >= 1.0:
        return 0.0, "night"      # sun never rises
    if cos_H0 <= -1.0:
        return 180.0, "day"      # sun never sets
    return math.degrees(math.acos(cos_H0)), None


def solar_times(
    day_of_year: int,
    latitude: float,
    *,
    longitude: float = 0.0,
    utc_offset_hours: float = 0.0,
    equinox_day: int = 1,
    year_days: float = TROPICAL_YEAR_DAYS,
    h0_deg: float = H0_DEG,
    obliquity_deg: float = OBLIQUITY_DEG,
) -> SolarTimes:
    """
    Local clock hours of sunrise, solar noon and sunset.
    Times are not wrapped into [0, 24): sunrise may be negative for a far-off
    time zone, and under polar day sunrise/sunset sit 12h either side of noon.
    """
    lon_deg = ecliptic_longitude_deg(day_of_year, equinox_day=equinox_day, year_days=year_days)
    delta_deg = solar_declination_deg(lon_deg, obliquity_deg)
    eot = equation_of_time_minutes(lon_deg, obliquity_deg)

    # Apparent noon 12h -> UTC (minus EOT and the longitude offset) -> local clock
    noon = 12.0 - eot / 60.0 - longitude / 15.0 + utc_offset_hours

    H0, polar = hour_angle_deg(latitude, delta_deg, h0_deg)
    half = H0 / 15.0
    return SolarTimes(sunrise=noon - half, solar_noon=noon, sunset=noon + half, polar=polar)


def solar_table(latitude: float, *, days: int = 366, **kwargs) -> Tuple[SolarTimes, ...]:
    """Precomputed solar times for day_of_year 1..days (index = day_of_year - 1)."""
    return tuple(solar_times(doy, latitude, **kwargs) for doy in range(1, days + 1))
