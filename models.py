"""Pydantic models for prayer time requests and responses."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from praytimes import AdjustmentSettings, CivilDate, TimeFormat
from praytimes.pipeline import MAX_TIMEZONE_OFFSET


class PrayerTimesQuery(BaseModel):
    """Validated arguments of a daily prayer times request."""

    model_config = ConfigDict(populate_by_name=True)

    latitude: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    longitude: float = Field(..., ge=-180.0, le=180.0, description="Longitude in degrees")
    date_local: str = Field(
        ...,
        alias="date",
        pattern=r"^\d{4}-\d{2}-\d{2}$",
        description="Local calendar date (YYYY-MM-DD)",
    )
    elevation_m: float = Field(0.0, ge=-500.0, description="Observer elevation in meters")
    method: Optional[str] = Field(None, description="Calculation method name, e.g. MWL or Tehran")
    asr_method: Optional[str] = Field(None, description="Standard or Hanafi")
    high_latitude_rule: Optional[str] = Field(
        None, description="None, NightMiddle, OneSeventh or AngleBased"
    )
    timezone: Union[float, Literal["auto"]] = Field(
        "auto",
        description="UTC offset in hours, or 'auto' to estimate it from the longitude",
    )
    dst: bool = Field(False, description="Add one hour of daylight saving time")
    time_format: Optional[TimeFormat] = Field(None, description="24h, 12h, 12hNS or Float")
    adjustments: Dict[str, int] = Field(
        default_factory=dict, description="Per-prayer offsets in minutes"
    )

    @field_validator("date_local")
    @classmethod
    def validate_date(cls, value: str) -> str:
        return CivilDate.from_iso(value).isoformat()

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: Union[float, str]) -> Union[float, str]:
        if isinstance(value, str):
            return value
        if not -MAX_TIMEZONE_OFFSET <= value <= MAX_TIMEZONE_OFFSET:
            raise ValueError(f"timezone must be within +/-{MAX_TIMEZONE_OFFSET:g} hours")
        return value

    @field_validator("adjustments")
    @classmethod
    def validate_adjustments(cls, value: Dict[str, int]) -> Dict[str, int]:
        return dict(AdjustmentSettings(value).offsets)


class PrayerTimesResponse(BaseModel):
    """Successful prayer times payload."""

    ok: bool = True
    status: str = Field(..., description="ok, partial, polar_day or polar_night")
    date: str = Field(..., description="Requested local date")
    latitude: float
    longitude: float
    elevation_m: float
    method: str = Field(..., description="Calculation method actually applied")
    timezone: float = Field(..., description="UTC offset applied, in hours")
    time_format: TimeFormat
    times: Dict[str, Optional[Union[str, float]]] = Field(
        ..., description="Prayer name to time, in canonical order"
    )
    unresolved: List[str] = Field(
        default_factory=list, description="Prayers the Sun's path leaves undefined"
    )


class ErrorResponse(BaseModel):
    """Error payload."""

    ok: bool = False
    code: str
    error: str
