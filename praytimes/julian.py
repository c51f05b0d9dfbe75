"""Civil calendar dates and Julian Day conversion."""

from __future__ import annotations

import calendar
import math
import re
from dataclasses import dataclass
from datetime import date
from typing import Union

from .errors import InvalidDate

__all__ = ["CivilDate", "to_julian", "from_julian", "as_civil_date", "MIN_YEAR", "MAX_YEAR"]

MIN_YEAR = 1
MAX_YEAR = 9999

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


@dataclass(frozen=True)
class CivilDate:
    """A proleptic Gregorian calendar date, validated on construction."""

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        for field_name in ("year", "month", "day"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidDate(f"{field_name} must be an integer, got {value!r}")
        if not MIN_YEAR <= self.year <= MAX_YEAR:
            raise InvalidDate(f"year must be within {MIN_YEAR}..{MAX_YEAR}, got {self.year}")
        if not 1 <= self.month <= 12:
            raise InvalidDate(f"month must be within 1..12, got {self.month}")
        days_in_month = calendar.monthrange(self.year, self.month)[1]
        if not 1 <= self.day <= days_in_month:
            raise InvalidDate(
                f"day must be within 1..{days_in_month} for {self.year:04d}-{self.month:02d}, "
                f"got {self.day}"
            )

    @classmethod
    def from_date(cls, value: date) -> "CivilDate":
        return cls(value.year, value.month, value.day)

    @classmethod
    def from_iso(cls, text: str) -> "CivilDate":
        """Parse a ``YYYY-MM-DD`` string."""

        match = _ISO_DATE.match(text.strip()) if isinstance(text, str) else None
        if match is None:
            raise InvalidDate(f"Invalid date format {text!r}, expected YYYY-MM-DD")
        year, month, day = (int(part) for part in match.groups())
        return cls(year, month, day)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def __str__(self) -> str:
        return self.isoformat()


def as_civil_date(value: Union[CivilDate, date, str]) -> CivilDate:
    """Coerce the date forms accepted by the public API into a :class:`CivilDate`."""

    if isinstance(value, CivilDate):
        return value
    if isinstance(value, date):
        return CivilDate.from_date(value)
    if isinstance(value, str):
        return CivilDate.from_iso(value)
    raise InvalidDate(f"Unsupported date value: {value!r}")


def to_julian(value: CivilDate) -> float:
    """Return the Julian Day at 00:00 UT of *value*."""

    year, month = value.year, value.month
    if month <= 2:
        year -= 1
        month += 12
    century = math.floor(year / 100)
    gregorian = 2 - century + math.floor(century / 4)
    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + value.day
        + gregorian
        - 1524.5
    )


def from_julian(jd: float) -> CivilDate:
    """Return the civil date containing Julian Day *jd*.

    The time of day carried by the fractional part is discarded.
    """

    z = math.floor(jd + 0.5)
    alpha = math.floor((z - 1867216.25) / 36524.25)
    a = z + 1 + alpha - math.floor(alpha / 4)
    b = a + 1524
    c = math.floor((b - 122.1) / 365.25)
    d = math.floor(365.25 * c)
    e = math.floor((b - d) / 30.6001)

    day = b - d - math.floor(30.6001 * e)
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715
    return CivilDate(int(year), int(month), int(day))
