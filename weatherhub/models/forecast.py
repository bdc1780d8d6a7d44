"""Forecast data models.

Provider payloads are parsed into frozen pydantic models; absent fields stay
``None`` rather than defaulting to zero. Derived values are frozen dataclasses
so a cached forecast can be shared between readers.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, field_validator


class CurrentConditions(BaseModel):
    model_config = {"extra": "ignore", "frozen": True}

    temperature: float | None = None
    windspeed: float | None = None
    winddirection: float | None = None
    time: str | None = None
    weathercode: int | None = None


class HourlySeries(BaseModel):
    model_config = {"extra": "ignore", "frozen": True}

    time: tuple[str | None, ...] = ()
    temperature_2m: tuple[float | None, ...] = ()
    weathercode: tuple[int | None, ...] | None = None

    @field_validator("time", "temperature_2m", mode="before")
    @classmethod
    def _null_series_is_empty(cls, value: Any) -> Any:
        return () if value is None else value


class DailySeries(BaseModel):
    model_config = {"extra": "ignore", "frozen": True}

    time: tuple[str | None, ...] = ()
    temperature_2m_min: tuple[float | None, ...] = ()
    temperature_2m_max: tuple[float | None, ...] = ()
    weathercode: tuple[int | None, ...] | None = None

    @field_validator("time", "temperature_2m_min", "temperature_2m_max", mode="before")
    @classmethod
    def _null_series_is_empty(cls, value: Any) -> Any:
        return () if value is None else value


class RawForecast(BaseModel):
    model_config = {"extra": "ignore", "frozen": True}

    latitude: float | None = None
    longitude: float | None = None
    current_weather: CurrentConditions | None = None
    hourly: HourlySeries | None = None
    daily: DailySeries | None = None
    utc_offset_seconds: int | None = None
    timezone: str | None = None
    timezone_abbreviation: str | None = None


class NormalizationWarning(StrEnum):
    NO_HOURLY_MATCH_FOR_TODAY = "no_hourly_match_for_today"
    TIMESTAMP_PARSE_FAILED = "timestamp_parse_failed"
    CURRENT_TIME_PARSE_FAILED = "current_time_parse_failed"
    INVALID_UTC_OFFSET = "invalid_utc_offset"


@dataclass(frozen=True)
class HourlyEntry:
    time: datetime  # offset-aware
    display_time: str
    temperature: float
    weather_code: int | None
    event_label: str

    @property
    def time_iso(self) -> str:
        return self.time.isoformat()

    def to_dict(self) -> dict[str, Any]:
        return {
            "timeIso": self.time_iso,
            "displayTime": self.display_time,
            "temperature": self.temperature,
            "weatherCode": self.weather_code,
            "eventLabel": self.event_label,
        }


@dataclass(frozen=True)
class NormalizedDay:
    today_entries: tuple[HourlyEntry, ...]
    min_temp: float | None
    max_temp: float | None
    min_temp_time: str | None
    max_temp_time: str | None
    current_time: str | None
    warnings: tuple[NormalizationWarning, ...] = ()


@dataclass(frozen=True)
class EnrichedForecast:
    latitude: float
    longitude: float
    raw: RawForecast
    city: str | None
    day_name: str
    min_temp: float | None
    max_temp: float | None
    min_temp_time: str | None
    max_temp_time: str | None
    today_entries: tuple[HourlyEntry, ...]
    current_time: str | None
    event_forecast: str
    alerts: tuple[str, ...]

    @property
    def current_weather(self) -> CurrentConditions | None:
        return self.raw.current_weather

    def to_dict(self) -> dict[str, Any]:
        """Client JSON shape. Builds fresh containers on every call."""
        current = None
        if self.raw.current_weather is not None:
            current = self.raw.current_weather.model_dump(mode="json")
            if self.current_time is not None:
                current["time"] = self.current_time
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "city": self.city,
            "dayName": self.day_name,
            "timezone": self.raw.timezone,
            "timezone_abbreviation": self.raw.timezone_abbreviation,
            "utc_offset_seconds": self.raw.utc_offset_seconds,
            "current_weather": current,
            "hourly": self.raw.hourly.model_dump(mode="json") if self.raw.hourly is not None else None,
            "daily": self.raw.daily.model_dump(mode="json") if self.raw.daily is not None else None,
            "minTemp": self.min_temp,
            "maxTemp": self.max_temp,
            "minTempTime": self.min_temp_time,
            "maxTempTime": self.max_temp_time,
            "todayEntries": [e.to_dict() for e in self.today_entries],
            "eventForecast": self.event_forecast,
            "alerts": list(self.alerts),
        }
