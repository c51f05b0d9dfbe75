"""Assemble a full day of prayer times from the solar model and a method."""

from __future__ import annotations

import datetime
import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .angles import fix_hour
from .errors import InvalidAdjustment, InvalidLocation, InvalidTimezone, UnreachableSolarEvent
from .formulas import (
    asr_angle,
    dhuhr_time,
    rise_set_angle,
    solar_noon_altitude,
    time_for_minutes_offset,
    time_for_sun_angle,
)
from .julian import CivilDate, as_civil_date, from_julian, to_julian
from .methods import (
    Angle,
    AsrMethod,
    CalculationMethod,
    HighLatitudeRule,
    MidnightMode,
    Parameter,
    get_method,
)
from .solar import SunPosition, sun_position

__all__ = [
    "TIME_NAMES",
    "INVALID_TIME",
    "MAX_TIMEZONE_OFFSET",
    "Location",
    "TimeFormat",
    "Rounding",
    "AdjustmentSettings",
    "SolarDay",
    "HorizonTimes",
    "PrayerTimeSet",
    "resolve_timezone",
    "solar_day",
    "horizon_times",
    "high_latitude_time",
    "format_time",
    "compute_prayer_times",
    "compute_timetable",
]

TIME_NAMES: Tuple[str, ...] = (
    "imsak",
    "fajr",
    "sunrise",
    "dhuhr",
    "asr",
    "sunset",
    "maghrib",
    "isha",
    "midnight",
)
INVALID_TIME = "-----"
MAX_TIMEZONE_OFFSET = 14.0

TimeValue = Union[str, float, None]


@dataclass(frozen=True)
class Location:
    """Observer position in degrees (east-positive longitude) and metres."""

    latitude: float
    longitude: float
    elevation: float = 0.0

    def __post_init__(self) -> None:
        for field_name in ("latitude", "longitude", "elevation"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise InvalidLocation(f"{field_name} must be a finite number, got {value!r}")
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidLocation(f"latitude must be within -90..90, got {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidLocation(f"longitude must be within -180..180, got {self.longitude}")
        if self.elevation < -500.0:
            raise InvalidLocation(f"elevation must be at least -500 m, got {self.elevation}")

    @classmethod
    def coerce(cls, value: Union["Location", Sequence[float]]) -> "Location":
        if isinstance(value, cls):
            return value
        try:
            return cls(*value)
        except TypeError as exc:
            raise InvalidLocation(
                f"location must be (latitude, longitude[, elevation]), got {value!r}"
            ) from exc


class TimeFormat(str, Enum):
    """Output representation of a time of day."""

    h24 = "24h"
    h12 = "12h"
    h12_no_suffix = "12hNS"
    fractional = "Float"

    @classmethod
    def from_name(cls, name: Union[str, "TimeFormat", None]) -> "TimeFormat":
        if isinstance(name, cls):
            return name
        if isinstance(name, str):
            for member in cls:
                if member.value.lower() == name.strip().lower():
                    return member
        return cls.h24


class Rounding(str, Enum):
    """How fractional minutes are turned into whole minutes."""

    nearest = "nearest"
    floor = "floor"
    ceil = "ceil"

    def to_minutes(self, hours: float) -> int:
        minutes = hours * 60.0
        if self is Rounding.floor:
            return math.floor(minutes)
        if self is Rounding.ceil:
            return math.ceil(minutes)
        return math.floor(minutes + 0.5)


@dataclass(frozen=True)
class AdjustmentSettings:
    """Manual per-prayer tuning in minutes, applied after computation."""

    offsets: Mapping[str, float] = field(default_factory=dict)
    rounding: Rounding = Rounding.nearest

    def __post_init__(self) -> None:
        cleaned: Dict[str, float] = {}
        for name, minutes in dict(self.offsets).items():
            key = str(name).lower()
            if key not in TIME_NAMES:
                raise InvalidAdjustment(f"Unknown prayer name in adjustments: {name!r}")
            if isinstance(minutes, bool) or not isinstance(minutes, (int, float)) or not math.isfinite(minutes):
                raise InvalidAdjustment(f"Adjustment for {name!r} must be a number of minutes")
            cleaned[key] = minutes
        object.__setattr__(self, "offsets", MappingProxyType(cleaned))
        object.__setattr__(self, "rounding", Rounding(self.rounding))

    def offset(self, name: str) -> float:
        return self.offsets.get(name, 0)


@dataclass(frozen=True)
class SolarDay:
    """Solar quantities shared by every prayer of one date and place."""

    date: CivilDate
    julian_day: float
    sun: SunPosition
    timezone: float
    dhuhr: float


@dataclass(frozen=True)
class HorizonTimes:
    sunrise: Optional[float]
    sunset: Optional[float]

    @property
    def night(self) -> Optional[float]:
        """Hours from sunset to the following sunrise."""

        if self.sunrise is None or self.sunset is None:
            return None
        return self.sunrise + 24.0 - self.sunset


@dataclass(frozen=True)
class PrayerTimeSet:
    """Prayer times for one date and location.

    ``times`` holds fractional hours of local time in canonical order, with
    ``None`` for prayers that could not be resolved; ``formatted`` holds the
    same values in the requested output format.
    """

    date: CivilDate
    location: Location
    method: str
    timezone: float
    time_format: TimeFormat
    status: str
    times: Mapping[str, Optional[float]]
    formatted: Mapping[str, TimeValue]
    unresolved: Mapping[str, UnreachableSolarEvent]

    def __getitem__(self, name: str) -> TimeValue:
        return self.formatted[name]

    def __iter__(self):
        return iter(self.formatted)

    def require(self, name: str) -> float:
        """Return the raw time of *name* or raise why it is unresolved."""

        value = self.times[name]
        if value is None:
            raise self.unresolved[name]
        return value

    def as_dict(self) -> Dict[str, TimeValue]:
        return dict(self.formatted)


def resolve_timezone(
    timezone: Union[float, str, None], longitude: float, dst: bool = False
) -> float:
    """Return the UTC offset in hours to use for *longitude*.

    ``"auto"`` (or ``None``) approximates the standard offset as the nearest
    whole hour of longitude; it knows nothing about political zones or DST.
    Explicit numbers are used as given.
    """

    if timezone is None or (isinstance(timezone, str) and timezone.strip().lower() == "auto"):
        offset = float(round(longitude / 15.0))
    elif isinstance(timezone, bool) or not isinstance(timezone, (int, float)):
        raise InvalidTimezone(f"timezone must be a number of hours or 'auto', got {timezone!r}")
    else:
        offset = float(timezone)
    if not math.isfinite(offset) or abs(offset) > MAX_TIMEZONE_OFFSET:
        raise InvalidTimezone(f"timezone offset must be within +/-{MAX_TIMEZONE_OFFSET:g} hours")
    return offset + 1.0 if dst else offset


def solar_day(date: CivilDate, location: Location, timezone: float) -> SolarDay:
    # Sun position is sampled once, at local solar noon.
    julian_day = to_julian(date) + 0.5 - location.longitude / 360.0
    sun = sun_position(julian_day)
    dhuhr = dhuhr_time(location.longitude, timezone, sun.equation_of_time)
    return SolarDay(date=date, julian_day=julian_day, sun=sun, timezone=timezone, dhuhr=dhuhr)


def _angle_time(day: SolarDay, location: Location, angle: float, after_noon: bool) -> Optional[float]:
    return time_for_sun_angle(angle, after_noon, day.sun.declination, location.latitude, day.dhuhr)


def horizon_times(day: SolarDay, location: Location) -> HorizonTimes:
    angle = rise_set_angle(location.elevation)
    return HorizonTimes(
        sunrise=_angle_time(day, location, angle, after_noon=False),
        sunset=_angle_time(day, location, angle, after_noon=True),
    )


def high_latitude_time(
    time: Optional[float],
    boundary: Optional[float],
    angle: float,
    night: Optional[float],
    rule: HighLatitudeRule,
    after_boundary: bool,
) -> Optional[float]:
    """Substitute a night-portion estimate for a twilight time.

    The estimate replaces *time* when the angle is never reached or when the
    computed time lies farther from *boundary* than the rule's portion of
    the night.
    """

    if boundary is None or night is None:
        return time
    portion = rule.night_portion(angle, night)
    if portion is None:
        return time
    if time is not None:
        distance = time - boundary if after_boundary else boundary - time
        if distance <= portion:
            return time
    return boundary + portion if after_boundary else boundary - portion


class _Resolver:
    """Collects times and the reasons for unresolved ones during one computation."""

    def __init__(self) -> None:
        self.times: Dict[str, Optional[float]] = {}
        self.unresolved: Dict[str, UnreachableSolarEvent] = {}

    def set(self, name: str, value: Optional[float], angle: Optional[float] = None, reason: str = "") -> None:
        self.times[name] = value
        if value is None:
            self.unresolved[name] = UnreachableSolarEvent(name, angle, reason)


def _twilight(
    resolver: _Resolver,
    name: str,
    parameter: Parameter,
    day: SolarDay,
    location: Location,
    horizon: HorizonTimes,
    rule: HighLatitudeRule,
    after_noon: bool,
    reference: str,
) -> None:
    """Resolve an event defined either by an angle or by minutes from *reference*."""

    if isinstance(parameter, Angle):
        boundary = horizon.sunset if after_noon else horizon.sunrise
        if boundary is None:
            # Twilight is measured from the horizon event, so it cannot exist without one.
            reason = "the Sun does not set" if after_noon else "the Sun does not rise"
            resolver.set(name, None, parameter.degrees, reason)
            return
        raw = _angle_time(day, location, parameter.degrees, after_noon)
        value = high_latitude_time(raw, boundary, parameter.degrees, horizon.night, rule, after_noon)
        if value is None:
            resolver.set(name, None, parameter.degrees, "no high latitude rule applies")
        else:
            resolver.set(name, value)
        return

    base = resolver.times.get(reference)
    if base is None:
        resolver.set(name, None, reason=f"depends on unresolved {reference}")
    else:
        resolver.set(name, time_for_minutes_offset(base, parameter.minutes, after_noon))


def _asr_time(day: SolarDay, location: Location, asr_method: AsrMethod) -> Optional[float]:
    declination = day.sun.declination
    if solar_noon_altitude(location.latitude, declination) <= 0.0:
        return None
    angle = asr_angle(asr_method.shadow_factor, location.latitude, declination)
    return _angle_time(day, location, angle, after_noon=True)


def _midnight(
    mode: MidnightMode, sunset: Optional[float], sunrise: Optional[float], fajr: Optional[float]
) -> Optional[float]:
    end = fajr if mode is MidnightMode.jafari else sunrise
    if sunset is None or end is None:
        return None
    return sunset + fix_hour(end - sunset) / 2.0


def _status(day: SolarDay, location: Location, times: Mapping[str, Optional[float]]) -> str:
    if times["sunrise"] is None or times["sunset"] is None:
        noon = solar_noon_altitude(location.latitude, day.sun.declination)
        return "polar_night" if noon < -rise_set_angle(location.elevation) else "polar_day"
    if any(value is None for value in times.values()):
        return "partial"
    return "ok"


def format_time(
    value: Optional[float],
    time_format: Union[TimeFormat, str] = TimeFormat.h24,
    rounding: Rounding = Rounding.nearest,
) -> TimeValue:
    """Render fractional hours as ``HH:MM``, ``H:MM am``, ``H:MM`` or a float."""

    time_format = TimeFormat.from_name(time_format)
    if value is None:
        return None if time_format is TimeFormat.fractional else INVALID_TIME
    if time_format is TimeFormat.fractional:
        return fix_hour(value)

    total = rounding.to_minutes(fix_hour(value)) % (24 * 60)
    hours, minutes = divmod(total, 60)
    if time_format is TimeFormat.h24:
        return f"{hours:02d}:{minutes:02d}"
    text = f"{(hours + 11) % 12 + 1}:{minutes:02d}"
    if time_format is TimeFormat.h12:
        text += " am" if hours < 12 else " pm"
    return text


def compute_prayer_times(
    date: Union[CivilDate, datetime.date, str],
    location: Union[Location, Sequence[float]],
    method: Union[str, CalculationMethod, None] = None,
    asr_method: Union[str, AsrMethod, None] = AsrMethod.standard,
    high_latitude_rule: Union[str, HighLatitudeRule, None] = HighLatitudeRule.night_middle,
    timezone: Union[float, str, None] = "auto",
    dst: bool = False,
    adjustments: Optional[AdjustmentSettings] = None,
    time_format: Union[TimeFormat, str] = TimeFormat.h24,
) -> PrayerTimeSet:
    """Compute the prayer times of *date* at *location*.

    Unknown method, Asr method and high latitude rule names fall back to
    their defaults. Prayers that cannot be resolved are reported through
    ``PrayerTimeSet.unresolved`` instead of failing the whole call.
    """

    civil_date = as_civil_date(date)
    location = Location.coerce(location)
    offset = resolve_timezone(timezone, location.longitude, dst)
    calculation = get_method(method)
    asr = AsrMethod.from_name(asr_method)
    rule = HighLatitudeRule.from_name(high_latitude_rule)
    adjustments = adjustments if adjustments is not None else AdjustmentSettings()
    time_format = TimeFormat.from_name(time_format)

    day = solar_day(civil_date, location, offset)
    horizon = horizon_times(day, location)

    resolver = _Resolver()
    rise_angle = rise_set_angle(location.elevation)
    resolver.set("sunrise", horizon.sunrise, rise_angle, "the Sun does not cross the horizon")
    resolver.set("sunset", horizon.sunset, rise_angle, "the Sun does not cross the horizon")
    resolver.set("dhuhr", day.dhuhr)

    _twilight(resolver, "fajr", calculation.fajr, day, location, horizon, rule, False, "sunrise")
    _twilight(resolver, "imsak", calculation.imsak, day, location, horizon, rule, False, "fajr")
    # Maghrib takes the angle-based share of the night under any rule, keeping it
    # strictly between Sunset and Isha.
    maghrib_rule = rule if rule is HighLatitudeRule.none else HighLatitudeRule.angle_based
    _twilight(
        resolver, "maghrib", calculation.maghrib, day, location, horizon, maghrib_rule, True, "sunset"
    )
    _twilight(resolver, "isha", calculation.isha, day, location, horizon, rule, True, "maghrib")

    resolver.set("asr", _asr_time(day, location, asr), reason="the Sun stays below the horizon")
    resolver.set(
        "midnight",
        _midnight(calculation.midnight, horizon.sunset, horizon.sunrise, resolver.times["fajr"]),
        reason="the night has no defined span",
    )

    times: Dict[str, Optional[float]] = {}
    for name in TIME_NAMES:
        value = resolver.times[name]
        times[name] = None if value is None else value + adjustments.offset(name) / 60.0

    formatted = {
        name: format_time(value, time_format, adjustments.rounding) for name, value in times.items()
    }
    unresolved = {name: resolver.unresolved[name] for name in TIME_NAMES if name in resolver.unresolved}

    return PrayerTimeSet(
        date=civil_date,
        location=location,
        method=calculation.name,
        timezone=offset,
        time_format=time_format,
        status=_status(day, location, times),
        times=MappingProxyType(times),
        formatted=MappingProxyType(formatted),
        unresolved=MappingProxyType(unresolved),
    )


def compute_timetable(
    start: Union[CivilDate, datetime.date, str],
    days: int,
    location: Union[Location, Sequence[float]],
    **options,
) -> List[PrayerTimeSet]:
    """Compute *days* consecutive days of prayer times starting at *start*.

    ``options`` are passed through to :func:`compute_prayer_times`.
    """

    first = as_civil_date(start)
    location = Location.coerce(location)
    origin = to_julian(first)
    return [
        compute_prayer_times(from_julian(origin + offset), location, **options)
        for offset in range(max(days, 0))
    ]
