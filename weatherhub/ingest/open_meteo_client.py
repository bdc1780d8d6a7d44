"""Open-Meteo geocoding and forecast API client."""

import logging
from typing import Any

from weatherhub.config.defaults import (
    DAILY_VARIABLES,
    FORECAST_URL,
    GEOCODING_URL,
    HOURLY_VARIABLES,
)
from weatherhub.ingest.http_fetch import HttpFetcher

logger = logging.getLogger(__name__)


class OpenMeteoClient:
    def __init__(
        self,
        fetcher: HttpFetcher,
        geocoding_url: str = GEOCODING_URL,
        forecast_url: str = FORECAST_URL,
    ):
        self.fetcher = fetcher
        self.geocoding_url = geocoding_url
        self.forecast_url = forecast_url

    def search(self, name: str, count: int = 1) -> Any:
        """Look up places by name. Returns the decoded body (may be None)."""
        params = {"name": name, "count": count}
        logger.debug("Geocoding %r (count=%d)", name, count)
        return self.fetcher.get_json(self.geocoding_url, params=params)

    def get_forecast(
        self,
        latitude: float,
        longitude: float,
        hourly: tuple[str, ...] = HOURLY_VARIABLES,
        daily: tuple[str, ...] = DAILY_VARIABLES,
    ) -> Any:
        """Fetch current, hourly and daily data in the location's own timezone.

        ``timezone=auto`` makes the provider return naive local timestamps
        together with ``utc_offset_seconds``.
        """
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "hourly": ",".join(hourly),
            "daily": ",".join(daily),
            "current_weather": "true",
            "timezone": "auto",
        }
        logger.debug("Fetching forecast for %s,%s", latitude, longitude)
        return self.fetcher.get_json(self.forecast_url, params=params)
