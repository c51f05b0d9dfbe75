from __future__ import annotations

import math

import erfa
import numpy as np
import pytest

from praytimes import CivilDate, sun_position, to_julian

MINUTES_PER_RADIAN = 1440.0 / (2.0 * math.pi)


def _reference_sun(jd: float) -> tuple[float, float]:
    """Declination (deg) and equation of time (min) from the ERFA ephemeris.

    UT and TT are treated as equal; the minute-level difference is far below
    the tolerance of the low-order model.
    """

    pvh, _ = erfa.epv00(jd, 0.0)
    sun_gcrs = -np.asarray(pvh["p"], dtype=float)
    rotation = np.asarray(erfa.pnm06a(jd, 0.0), dtype=float)
    sun_true = rotation @ sun_gcrs
    distance = np.linalg.norm(sun_true)
    declination = math.degrees(math.asin(sun_true[2] / distance))
    right_ascension = math.atan2(sun_true[1], sun_true[0])

    gast = float(erfa.gst06a(jd, 0.0, jd, 0.0))
    day_fraction = (jd + 0.5) % 1.0
    eot = gast - right_ascension + math.pi - 2.0 * math.pi * day_fraction
    eot = (eot + math.pi) % (2.0 * math.pi) - math.pi
    return declination, eot * MINUTES_PER_RADIAN


@pytest.mark.parametrize(
    "civil",
    [
        CivilDate(2000, 1, 1),
        CivilDate(2010, 3, 20),
        CivilDate(2018, 6, 21),
        CivilDate(2024, 8, 25),
        CivilDate(2024, 11, 3),
        CivilDate(2031, 2, 11),
        CivilDate(2039, 9, 23),
    ],
)
def test_matches_erfa_ephemeris(civil: CivilDate) -> None:
    jd = to_julian(civil) + 0.5
    declination, equation_of_time = _reference_sun(jd)
    position = sun_position(jd)
    assert position.declination == pytest.approx(declination, abs=0.05)
    assert position.equation_of_time == pytest.approx(equation_of_time, abs=0.5)


def test_solstice_declination() -> None:
    position = sun_position(to_julian(CivilDate(2024, 6, 21)))
    assert position.declination == pytest.approx(23.44, abs=0.05)
    position = sun_position(to_julian(CivilDate(2024, 12, 21)) + 0.5)
    assert position.declination == pytest.approx(-23.44, abs=0.05)


def test_equation_of_time_extremes() -> None:
    november = sun_position(to_julian(CivilDate(2024, 11, 3)) + 0.5)
    february = sun_position(to_julian(CivilDate(2024, 2, 11)) + 0.5)
    assert 15.5 < november.equation_of_time < 17.0
    assert -15.0 < february.equation_of_time < -13.5


def test_equation_of_time_is_wrapped() -> None:
    jd = to_julian(CivilDate(2000, 1, 1))
    for day in range(0, 3 * 366):
        assert -20.0 < sun_position(jd + day).equation_of_time < 20.0


def test_coordinates_are_normalised() -> None:
    position = sun_position(to_julian(CivilDate(1950, 3, 21)))
    assert 0.0 <= position.right_ascension < 24.0
    assert 0.0 <= position.ecliptic_longitude < 360.0


def test_sun_position_is_deterministic() -> None:
    jd = 2460547.5 - 51.389 / 360.0
    first = sun_position(jd)
    second = sun_position(jd)
    assert first == second
    assert first.declination.hex() == second.declination.hex()
