"""Degree-based trigonometry and range normalisation."""

from __future__ import annotations

import math

__all__ = [
    "dsin",
    "dcos",
    "dtan",
    "darcsin",
    "darccos",
    "darctan2",
    "darccot",
    "fix_angle",
    "fix_hour",
    "wrap_hour",
]


def dsin(degrees: float) -> float:
    return math.sin(math.radians(degrees))


def dcos(degrees: float) -> float:
    return math.cos(math.radians(degrees))


def dtan(degrees: float) -> float:
    return math.tan(math.radians(degrees))


def darcsin(x: float) -> float:
    return math.degrees(math.asin(x))


def darccos(x: float) -> float:
    return math.degrees(math.acos(x))


def darctan2(y: float, x: float) -> float:
    return math.degrees(math.atan2(y, x))


def darccot(x: float) -> float:
    return math.degrees(math.atan(1.0 / x))


def _fix(value: float, period: float) -> float:
    value -= period * math.floor(value / period)
    return value + period if value < 0 else value


def fix_angle(degrees: float) -> float:
    """Normalise an angle into [0, 360)."""

    return _fix(degrees, 360.0)


def fix_hour(hours: float) -> float:
    """Normalise a time of day into [0, 24)."""

    return _fix(hours, 24.0)


def wrap_hour(hours: float) -> float:
    """Normalise an hour difference into [-12, 12)."""

    return fix_hour(hours + 12.0) - 12.0
