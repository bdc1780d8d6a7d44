"""Default upstream endpoints and request variables."""

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
REVERSE_GEOCODING_URL = "https://nominatim.openstreetmap.org/reverse"
DEFAULT_USER_AGENT = "weatherhub/0.1.0"

HOURLY_VARIABLES: tuple[str, ...] = ("temperature_2m", "weathercode")
DAILY_VARIABLES: tuple[str, ...] = (
    "temperature_2m_min",
    "temperature_2m_max",
    "weathercode",
)
