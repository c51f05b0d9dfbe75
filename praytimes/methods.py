"""Calculation conventions and high-latitude policy.

The registry of calculation methods is built once at import time and exposed
read-only; lookups by name are case-insensitive and fall back to a default
unless ``strict=True`` is requested.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

from .errors import UnknownAsrMethod, UnknownHighLatitudeRule, UnknownMethod

__all__ = [
    "Angle",
    "Minutes",
    "Parameter",
    "MidnightMode",
    "AsrMethod",
    "HighLatitudeRule",
    "CalculationMethod",
    "METHODS",
    "DEFAULT_METHOD",
    "get_method",
]


@dataclass(frozen=True)
class Angle:
    """Solar depression below the horizon, in degrees."""

    degrees: float

    def __str__(self) -> str:
        return f"{self.degrees:g} deg"


@dataclass(frozen=True)
class Minutes:
    """Fixed offset from a reference prayer, in minutes."""

    minutes: float

    def __str__(self) -> str:
        return f"{self.minutes:g} min"


Parameter = Union[Angle, Minutes]


def _lookup(enum_cls, name: str):
    key = name.strip().lower().replace("_", "").replace("-", "").replace(" ", "")
    for member in enum_cls:
        if member.value.lower() == key or member.name.replace("_", "") == key:
            return member
    return None


class MidnightMode(str, Enum):
    """How the middle of the night is measured."""

    standard = "Standard"  # sunset to sunrise
    jafari = "Jafari"  # sunset to fajr


class AsrMethod(str, Enum):
    """Juristic convention for the Asr shadow length."""

    standard = "Standard"
    hanafi = "Hanafi"

    @property
    def shadow_factor(self) -> int:
        return 2 if self is AsrMethod.hanafi else 1

    @classmethod
    def from_name(cls, name: Union[str, "AsrMethod", None], strict: bool = False) -> "AsrMethod":
        if isinstance(name, cls):
            return name
        member = _lookup(cls, name) if isinstance(name, str) else None
        if member is None:
            if strict:
                raise UnknownAsrMethod(f"Unknown Asr method: {name!r}")
            return cls.standard
        return member


class HighLatitudeRule(str, Enum):
    """Substitution applied when twilight angles are out of reach."""

    none = "None"
    night_middle = "NightMiddle"
    one_seventh = "OneSeventh"
    angle_based = "AngleBased"

    def night_portion(self, angle: float, night: float) -> Optional[float]:
        """Length in hours of the part of *night* allotted to an event at *angle*."""

        if self is HighLatitudeRule.none:
            return None
        if self is HighLatitudeRule.angle_based:
            fraction = angle / 60.0
        elif self is HighLatitudeRule.one_seventh:
            fraction = 1.0 / 7.0
        else:
            fraction = 0.5
        return fraction * night

    @classmethod
    def from_name(
        cls, name: Union[str, "HighLatitudeRule", None], strict: bool = False
    ) -> "HighLatitudeRule":
        if isinstance(name, cls):
            return name
        member = _lookup(cls, name) if isinstance(name, str) else None
        if member is None:
            if strict:
                raise UnknownHighLatitudeRule(f"Unknown high latitude rule: {name!r}")
            return cls.night_middle
        return member


@dataclass(frozen=True)
class CalculationMethod:
    """A named set of angles and offsets used to derive the prayer times."""

    name: str
    description: str
    fajr: Angle
    isha: Parameter
    maghrib: Parameter = Minutes(0)
    midnight: MidnightMode = MidnightMode.standard
    imsak: Parameter = Minutes(10)


_PRESETS = (
    CalculationMethod("MWL", "Muslim World League", Angle(18), Angle(17)),
    CalculationMethod("ISNA", "Islamic Society of North America (ISNA)", Angle(15), Angle(15)),
    CalculationMethod("Egypt", "Egyptian General Authority of Survey", Angle(19.5), Angle(17.5)),
    CalculationMethod("Makkah", "Umm Al-Qura University, Makkah", Angle(18.5), Minutes(90)),
    CalculationMethod("Karachi", "University of Islamic Sciences, Karachi", Angle(18), Angle(18)),
    CalculationMethod(
        "Tehran",
        "Institute of Geophysics, University of Tehran",
        Angle(17.7),
        Angle(14),
        maghrib=Angle(4.5),
        midnight=MidnightMode.jafari,
    ),
    CalculationMethod(
        "Jafari",
        "Shia Ithna-Ashari, Leva Institute, Qum",
        Angle(16),
        Angle(14),
        maghrib=Angle(4),
        midnight=MidnightMode.jafari,
    ),
)

METHODS: Mapping[str, CalculationMethod] = MappingProxyType(
    {method.name: method for method in _PRESETS}
)
DEFAULT_METHOD = "Tehran"

_BY_KEY: Dict[str, CalculationMethod] = {name.lower(): method for name, method in METHODS.items()}


def get_method(
    name: Union[str, CalculationMethod, None], strict: bool = False
) -> CalculationMethod:
    """Return the registered method called *name*.

    Unknown names resolve to :data:`DEFAULT_METHOD` unless *strict* is set,
    in which case :class:`UnknownMethod` is raised.
    """

    if isinstance(name, CalculationMethod):
        return name
    method = _BY_KEY.get(name.strip().lower()) if isinstance(name, str) else None
    if method is None:
        if strict:
            raise UnknownMethod(f"Unknown calculation method: {name!r}")
        return METHODS[DEFAULT_METHOD]
    return method
