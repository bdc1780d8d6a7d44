"""Output formatters for enriched forecasts."""

import json

from weatherhub.models.forecast import EnrichedForecast


def format_forecast_text(f: EnrichedForecast) -> str:
    """Plain text summary for terminals and logs."""
    lines = [f"=== {f.city or 'Unknown location'} | {f.day_name} ==="]
    current = f.current_weather
    if current is not None and current.temperature is not None:
        wind = ""
        if current.windspeed is not None:
            wind = f", wind {current.windspeed:.1f} km/h"
        lines.append(f"Now: {current.temperature:.1f}°C{wind}")
    if f.min_temp is not None and f.max_temp is not None:
        lines.append(
            f"Low {f.min_temp:.1f}°C{_at(f.min_temp_time)} | "
            f"High {f.max_temp:.1f}°C{_at(f.max_temp_time)}"
        )
    lines.append(f"Outlook: {f.event_forecast}")
    lines.append(f"Alerts: {', '.join(f.alerts)}")
    for entry in f.today_entries:
        lines.append(
            f"  {entry.display_time:>8}  {entry.temperature:5.1f}°C  {entry.event_label}"
        )
    return "\n".join(lines)


def format_forecast_json(f: EnrichedForecast) -> str:
    """JSON body as served over HTTP."""
    return json.dumps(f.to_dict(), indent=2, ensure_ascii=False)


def _at(time_iso: str | None) -> str:
    return f" at {time_iso[11:16]}" if time_iso else ""
