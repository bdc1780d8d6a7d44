"""Nominatim reverse-geocoding client."""

import logging
from typing import Any

from weatherhub.config.defaults import DEFAULT_USER_AGENT, REVERSE_GEOCODING_URL
from weatherhub.ingest.http_fetch import HttpFetcher

logger = logging.getLogger(__name__)


class NominatimClient:
    def __init__(
        self,
        fetcher: HttpFetcher,
        base_url: str = REVERSE_GEOCODING_URL,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.fetcher = fetcher
        self.base_url = base_url
        self.user_agent = user_agent

    def reverse(self, latitude: float, longitude: float) -> Any:
        """Reverse geocode a coordinate pair. Nominatim rejects requests without a User-Agent."""
        params = {"format": "json", "lat": latitude, "lon": longitude}
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        return self.fetcher.get_json(self.base_url, params=params, headers=headers)
