"""Low-order solar position model.

The Sun's mean anomaly and mean longitude are linear in the number of days
since J2000.0; the equation of centre adds the first two harmonics. This is
accurate to roughly 0.01 deg in declination and well under a minute in the
equation of time between 1900 and 2100, which is ample for prayer times but
not for ephemeris work.
"""

from __future__ import annotations

from dataclasses import dataclass

from .angles import darcsin, darctan2, dcos, dsin, fix_angle, fix_hour, wrap_hour

__all__ = ["SunPosition", "sun_position", "J2000"]

J2000 = 2451545.0


@dataclass(frozen=True)
class SunPosition:
    """Apparent solar coordinates needed by the time formulas."""

    declination: float  # degrees
    equation_of_time: float  # minutes, apparent minus mean solar time
    right_ascension: float  # hours
    ecliptic_longitude: float  # degrees


def sun_position(jd: float) -> SunPosition:
    """Return declination and equation of time for Julian Day *jd*."""

    days = jd - J2000
    mean_anomaly = fix_angle(357.529 + 0.98560028 * days)
    mean_longitude = fix_angle(280.459 + 0.98564736 * days)
    longitude = fix_angle(
        mean_longitude + 1.915 * dsin(mean_anomaly) + 0.020 * dsin(2 * mean_anomaly)
    )
    obliquity = 23.439 - 0.00000036 * days

    right_ascension = fix_hour(darctan2(dcos(obliquity) * dsin(longitude), dcos(longitude)) / 15.0)
    declination = darcsin(dsin(obliquity) * dsin(longitude))
    equation_of_time = wrap_hour(mean_longitude / 15.0 - right_ascension) * 60.0

    return SunPosition(
        declination=declination,
        equation_of_time=equation_of_time,
        right_ascension=right_ascension,
        ecliptic_longitude=longitude,
    )
