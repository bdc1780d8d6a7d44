"""WMO weather-code labels and severity alerts."""

from dataclasses import dataclass

WMO_LABELS: dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    71: "Slight snow",
    73: "Moderate snow",
    75: "Heavy snow",
    77: "Snow grains",
    80: "Rain showers",
    81: "Heavy rain showers",
    82: "Violent rain showers",
    85: "Snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with hail",
    99: "Severe thunderstorm",
}

STORM_CODES = frozenset({95, 96, 99})
SNOW_CODES = frozenset({71, 73, 75, 77})
HEAVY_PRECIPITATION_CODES = frozenset({63, 65, 81, 82})
FOG_CODES = frozenset({45, 48})

CODE_ALERTS: tuple[tuple[frozenset[int], str], ...] = (
    (STORM_CODES, "Severe storm risk"),
    (SNOW_CODES, "Blizzard risk"),
    (HEAVY_PRECIPITATION_CODES, "Heavy precipitation / flood risk"),
    (FOG_CODES, "Dense fog"),
)

# Cascading tiers, checked top-down; only the first match in each list fires.
HEAT_TIERS: tuple[tuple[float, str], ...] = (
    (42.0, "Extreme heat"),
    (38.0, "Severe heat"),
    (35.0, "Heatwave"),
)
COLD_TIERS: tuple[tuple[float, str], ...] = (
    (-40.0, "Extreme polar cold"),
    (-30.0, "Extreme cold"),
    (-20.0, "Severe cold"),
    (-5.0, "Very cold"),
    (0.0, "Freezing"),
)

NO_ALERTS = "No severe events detected"
UNKNOWN_LABEL = "Unknown"


@dataclass(frozen=True)
class EventClassification:
    label: str
    alerts: tuple[str, ...]


def label_for(weather_code: int | None) -> str:
    if weather_code is None:
        return UNKNOWN_LABEL
    return WMO_LABELS.get(weather_code, f"Code {weather_code}")


def classify(weather_code: int | None, temperature: float | None) -> EventClassification:
    """Map a weather code and temperature to a label and deduplicated alerts.

    An absent code is "Unknown", never code 0. The temperature is whatever
    the caller deems relevant: the hour's own value, or the day's maximum.
    """
    alerts: list[str] = []

    if weather_code is not None:
        for codes, alert in CODE_ALERTS:
            if weather_code in codes:
                alerts.append(alert)

    if temperature is not None:
        for threshold, alert in HEAT_TIERS:
            if temperature >= threshold:
                alerts.append(alert)
                break
        for threshold, alert in COLD_TIERS:
            if temperature <= threshold:
                alerts.append(alert)
                break

    if not alerts:
        alerts.append(NO_ALERTS)

    return EventClassification(
        label=label_for(weather_code),
        alerts=tuple(dict.fromkeys(alerts)),
    )
