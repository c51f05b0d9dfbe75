"""Solve for the clock time at which the Sun reaches a given angle.

All times are fractional hours of local civil time. Angles passed to
:func:`hour_angle` and :func:`time_for_sun_angle` are depressions below the
horizon (18 means the Sun is 18 deg below it); negative values are altitudes
above the horizon, as used for Asr.

Functions that can fail because the Sun never reaches the requested angle
return ``None`` instead of a number.
"""

from __future__ import annotations

import math
from typing import Optional

from .angles import darccos, darccot, dcos, dsin, dtan

__all__ = [
    "dhuhr_time",
    "hour_angle",
    "time_for_sun_angle",
    "time_for_minutes_offset",
    "asr_angle",
    "rise_set_angle",
    "solar_noon_altitude",
    "HORIZON_REFRACTION",
]

# Refraction plus the Sun's semi-diameter at the horizon, in degrees.
HORIZON_REFRACTION = 0.833


def dhuhr_time(longitude: float, timezone: float, equation_of_time: float) -> float:
    """Solar noon in local civil time.

    ``equation_of_time`` is in minutes.
    """

    return 12.0 + timezone - longitude / 15.0 - equation_of_time / 60.0


def hour_angle(angle: float, declination: float, latitude: float) -> Optional[float]:
    """Hour angle in degrees at which the Sun is *angle* deg below the horizon.

    Returns ``None`` when the Sun never reaches that angle on the day.
    """

    denominator = dcos(latitude) * dcos(declination)
    if denominator == 0.0:
        return None
    cos_h = (-dsin(angle) - dsin(latitude) * dsin(declination)) / denominator
    if not -1.0 <= cos_h <= 1.0 or math.isnan(cos_h):
        return None
    return darccos(cos_h)


def time_for_sun_angle(
    angle: float,
    after_noon: bool,
    declination: float,
    latitude: float,
    dhuhr: float,
) -> Optional[float]:
    """Clock time before (or after) *dhuhr* when the Sun is at *angle*."""

    h = hour_angle(angle, declination, latitude)
    if h is None:
        return None
    offset = h / 15.0
    return dhuhr + offset if after_noon else dhuhr - offset


def time_for_minutes_offset(base: float, minutes: float, after_noon: bool) -> float:
    """Shift *base* by *minutes*, forward after noon and backward before it."""

    offset = minutes / 60.0
    return base + offset if after_noon else base - offset


def asr_angle(shadow_factor: float, latitude: float, declination: float) -> float:
    """Depression angle of the Sun at Asr for the given shadow factor.

    Asr is when an object's shadow equals *shadow_factor* times its length
    plus the length of its noon shadow. The result is negative because the Sun
    is above the horizon.
    """

    return -darccot(shadow_factor + dtan(abs(latitude - declination)))


def rise_set_angle(elevation: float = 0.0) -> float:
    """Depression of the Sun's centre at apparent sunrise and sunset.

    Observers above sea level see the horizon dip by roughly
    ``0.0347 * sqrt(elevation)`` degrees.
    """

    return HORIZON_REFRACTION + 0.0347 * math.sqrt(max(elevation, 0.0))


def solar_noon_altitude(latitude: float, declination: float) -> float:
    return 90.0 - abs(latitude - declination)
