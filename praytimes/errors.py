"""Exception types raised by the prayer times engine."""

from __future__ import annotations

from typing import Optional

__all__ = [
    "PrayerTimesError",
    "InvalidDate",
    "InvalidLocation",
    "InvalidTimezone",
    "InvalidAdjustment",
    "UnknownMethod",
    "UnknownAsrMethod",
    "UnknownHighLatitudeRule",
    "UnreachableSolarEvent",
]


class PrayerTimesError(Exception):
    """Base class for every failure reported by the engine."""

    code = "prayer_times_error"


class InvalidDate(PrayerTimesError, ValueError):
    """Raised when calendar fields are out of range."""

    code = "invalid_date"


class InvalidLocation(PrayerTimesError, ValueError):
    """Raised when latitude, longitude or elevation are out of range."""

    code = "invalid_location"


class InvalidTimezone(PrayerTimesError, ValueError):
    code = "invalid_timezone"


class InvalidAdjustment(PrayerTimesError, ValueError):
    code = "invalid_adjustment"


class UnknownMethod(PrayerTimesError, LookupError):
    """Raised by strict lookups for an unregistered calculation method."""

    code = "unknown_method"


class UnknownAsrMethod(PrayerTimesError, LookupError):
    code = "unknown_asr_method"


class UnknownHighLatitudeRule(PrayerTimesError, LookupError):
    code = "unknown_high_latitude_rule"


class UnreachableSolarEvent(PrayerTimesError):
    """The Sun never reaches the angle a prayer needs on that day.

    Instances are stored on the result for every unresolved prayer rather
    than raised from the computation itself.
    """

    code = "unreachable_solar_event"

    def __init__(self, prayer: str, angle: Optional[float] = None, reason: str = "") -> None:
        self.prayer = prayer
        self.angle = angle
        self.reason = reason
        message = f"{prayer} cannot be resolved"
        if angle is not None:
            message += f": the Sun does not reach {angle:g} deg below the horizon"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
