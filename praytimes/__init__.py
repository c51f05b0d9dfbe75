"""Prayer times computed from solar geometry."""

from .errors import (
    InvalidAdjustment,
    InvalidDate,
    InvalidLocation,
    InvalidTimezone,
    PrayerTimesError,
    UnknownAsrMethod,
    UnknownHighLatitudeRule,
    UnknownMethod,
    UnreachableSolarEvent,
)
from .julian import CivilDate, from_julian, to_julian
from .methods import (
    DEFAULT_METHOD,
    METHODS,
    Angle,
    AsrMethod,
    CalculationMethod,
    HighLatitudeRule,
    MidnightMode,
    Minutes,
    get_method,
)
from .pipeline import (
    INVALID_TIME,
    TIME_NAMES,
    AdjustmentSettings,
    Location,
    PrayerTimeSet,
    Rounding,
    TimeFormat,
    compute_prayer_times,
    compute_timetable,
    format_time,
)
from .solar import SunPosition, sun_position

__all__ = [
    "AdjustmentSettings",
    "Angle",
    "AsrMethod",
    "CalculationMethod",
    "CivilDate",
    "DEFAULT_METHOD",
    "HighLatitudeRule",
    "INVALID_TIME",
    "InvalidAdjustment",
    "InvalidDate",
    "InvalidLocation",
    "InvalidTimezone",
    "Location",
    "METHODS",
    "MidnightMode",
    "Minutes",
    "PrayerTimeSet",
    "PrayerTimesError",
    "Rounding",
    "SunPosition",
    "TIME_NAMES",
    "TimeFormat",
    "UnknownAsrMethod",
    "UnknownHighLatitudeRule",
    "UnknownMethod",
    "UnreachableSolarEvent",
    "compute_prayer_times",
    "compute_timetable",
    "format_time",
    "from_julian",
    "get_method",
    "sun_position",
    "to_julian",
]
