"""Request boundary for the prayer times engine.

Turns a tool-style argument mapping into an engine call, and the engine's
result or failure into response models and plain text. This is the only
layer that logs.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from config import Settings, load_settings
from models import ErrorResponse, PrayerTimesQuery, PrayerTimesResponse
from praytimes import (
    AdjustmentSettings,
    Location,
    PrayerTimesError,
    UnknownMethod,
    compute_prayer_times,
    get_method,
)

LOGGER = logging.getLogger("prayer-times")

__all__ = ["get_daily_prayer_times", "render_text", "error_response", "configure_logging"]


def configure_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level, format="%(message)s")
    LOGGER.setLevel(settings.log_level)


def get_daily_prayer_times(
    arguments: Mapping[str, Any], settings: Optional[Settings] = None
) -> PrayerTimesResponse:
    """Validate *arguments*, compute the day's prayer times and build the response.

    Raises
    ------
    pydantic.ValidationError
        If the arguments do not describe a valid request.
    PrayerTimesError
        If the engine rejects the request.
    """

    settings = settings or load_settings()
    start_time = time.perf_counter()
    query = PrayerTimesQuery.model_validate(dict(arguments))

    method = query.method or settings.method
    try:
        method = get_method(method, strict=True).name
    except UnknownMethod:
        LOGGER.warning(
            json.dumps({"event": "method_fallback", "requested": method, "applied": settings.method})
        )
        method = settings.method

    result = compute_prayer_times(
        date=query.date_local,
        location=Location(query.latitude, query.longitude, query.elevation_m),
        method=method,
        asr_method=query.asr_method or settings.asr_method,
        high_latitude_rule=query.high_latitude_rule or settings.high_latitude_rule,
        timezone=query.timezone,
        dst=query.dst,
        adjustments=AdjustmentSettings(query.adjustments),
        time_format=query.time_format or settings.time_format,
    )
    duration_ms = (time.perf_counter() - start_time) * 1000.0

    response = PrayerTimesResponse(
        status=result.status,
        date=result.date.isoformat(),
        latitude=result.location.latitude,
        longitude=result.location.longitude,
        elevation_m=result.location.elevation,
        method=result.method,
        timezone=result.timezone,
        time_format=result.time_format,
        times=result.as_dict(),
        unresolved=list(result.unresolved),
    )

    LOGGER.info(
        json.dumps(
            {
                "event": "prayer_times",
                "lat": query.latitude,
                "lon": query.longitude,
                "date": response.date,
                "method": response.method,
                "status": response.status,
                "duration_ms": round(duration_ms, 3),
            }
        )
    )
    return response


def render_text(response: PrayerTimesResponse) -> str:
    """Format a response as the plain-text block returned to tool callers."""

    lines = [f"Prayer times for {response.date} at [{response.latitude}, {response.longitude}]:"]
    lines.extend(f"{name}: {value}" for name, value in response.times.items())
    return "\n".join(lines)


def error_response(exc: Exception) -> ErrorResponse:
    if isinstance(exc, ValidationError):
        code = "validation_error"
        message = ", ".join(error["msg"] for error in exc.errors())
    elif isinstance(exc, PrayerTimesError):
        code = exc.code
        message = str(exc)
    else:
        code = "internal_error"
        message = "Unhandled error"
    LOGGER.error(json.dumps({"event": "error", "code": code, "message": message}))
    return ErrorResponse(code=code, error=message)
