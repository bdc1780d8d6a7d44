"""Temporal normalization: offset-aware timestamps, today's hourly slice, daily extremes.

The provider returns naive local timestamps plus ``utc_offset_seconds``
when asked for ``timezone=auto``. Everything here attaches that offset.
"""

from datetime import datetime, timedelta, timezone

from weatherhub.enrich.event_classifier import classify
from weatherhub.models.forecast import (
    HourlyEntry,
    HourlySeries,
    NormalizationWarning,
    NormalizedDay,
    RawForecast,
)

FALLBACK_HOURS = 24
MAX_OFFSET_SECONDS = 24 * 3600


def utc_offset(raw: RawForecast) -> timezone:
    """Fixed-offset tzinfo for the forecast location.

    A missing offset means UTC; so does one of a day or more, which no
    fixed offset can represent.
    """
    seconds = raw.utc_offset_seconds or 0
    if abs(seconds) >= MAX_OFFSET_SECONDS:
        return timezone.utc
    return timezone(timedelta(seconds=seconds))


def attach_offset(value: str, tz: timezone) -> datetime:
    """Parse a local timestamp and pin it to ``tz``.

    Naive values get the offset attached as-is; values that already carry
    an offset are converted.
    """
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tz)
    return parsed.astimezone(tz)


def display_time(moment: datetime) -> str:
    """12-hour clock, e.g. "3:00 PM"."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"


def day_name(now: datetime, tz: timezone) -> str:
    """Local calendar day, e.g. "Monday, 03 June 2024"."""
    return now.astimezone(tz).strftime("%A, %d %B %Y")


def normalize(raw: RawForecast) -> NormalizedDay:
    """Build today's hourly entries and min/max with timestamps.

    Never raises on bad timestamps: parse failures degrade to an empty
    hourly slice and daily min/max, reported through ``warnings``.
    """
    warnings: list[NormalizationWarning] = []

    tz = utc_offset(raw)
    if abs(raw.utc_offset_seconds or 0) >= MAX_OFFSET_SECONDS:
        warnings.append(NormalizationWarning.INVALID_UTC_OFFSET)

    today = _today_date(raw)
    entries: list[HourlyEntry] = []
    hourly = raw.hourly
    if hourly is not None:
        try:
            entries = _today_entries(hourly, today, tz)
            if not entries:
                warnings.append(NormalizationWarning.NO_HOURLY_MATCH_FOR_TODAY)
                entries = _leading_entries(hourly, tz, FALLBACK_HOURS)
            entries.sort(key=lambda e: e.time)
        except (ValueError, TypeError):
            warnings.append(NormalizationWarning.TIMESTAMP_PARSE_FAILED)
            entries = []
    else:
        warnings.append(NormalizationWarning.NO_HOURLY_MATCH_FOR_TODAY)

    if entries:
        # min()/max() return the first extreme they meet, so ties keep the earliest hour.
        coldest = min(entries, key=lambda e: e.temperature)
        warmest = max(entries, key=lambda e: e.temperature)
        min_temp, min_time = coldest.temperature, coldest.time_iso
        max_temp, max_time = warmest.temperature, warmest.time_iso
    else:
        daily = raw.daily
        min_temp = _first(daily.temperature_2m_min) if daily is not None else None
        max_temp = _first(daily.temperature_2m_max) if daily is not None else None
        min_time = max_time = None

    current_time = None
    current = raw.current_weather
    if current is not None and current.time:
        try:
            current_time = attach_offset(current.time, tz).isoformat()
        except ValueError:
            warnings.append(NormalizationWarning.CURRENT_TIME_PARSE_FAILED)

    return NormalizedDay(
        today_entries=tuple(entries),
        min_temp=min_temp,
        max_temp=max_temp,
        min_temp_time=min_time,
        max_temp_time=max_time,
        current_time=current_time,
        warnings=tuple(warnings),
    )


def _today_date(raw: RawForecast) -> str | None:
    # Provider convention: the first daily entry is the location's today.
    if raw.daily is None:
        return None
    return _first(raw.daily.time) or None


def _today_entries(hourly: HourlySeries, today: str | None, tz: timezone) -> list[HourlyEntry]:
    if not today:
        return []
    entries = []
    for i in range(_series_length(hourly)):
        stamp = hourly.time[i]
        if not stamp or not stamp.startswith(today):
            continue
        entry = _entry(hourly, i, tz)
        if entry is not None:
            entries.append(entry)
    return entries


def _leading_entries(hourly: HourlySeries, tz: timezone, limit: int) -> list[HourlyEntry]:
    entries = []
    for i in range(min(limit, _series_length(hourly))):
        if not hourly.time[i]:
            continue
        entry = _entry(hourly, i, tz)
        if entry is not None:
            entries.append(entry)
    return entries


def _entry(hourly: HourlySeries, i: int, tz: timezone) -> HourlyEntry | None:
    temperature = hourly.temperature_2m[i]
    if temperature is None:
        return None
    moment = attach_offset(hourly.time[i], tz)
    code = _at(hourly.weathercode, i)
    return HourlyEntry(
        time=moment,
        display_time=display_time(moment),
        temperature=temperature,
        weather_code=code,
        event_label=classify(code, temperature).label,
    )


def _series_length(hourly: HourlySeries) -> int:
    return min(len(hourly.time), len(hourly.temperature_2m))


def _at(values: tuple | None, i: int):
    if values is None or i >= len(values):
        return None
    return values[i]


def _first(values: tuple):
    return values[0] if values else None
