"""Forecast fetcher: retrieves raw forecasts and parses them into RawForecast."""

import logging

from pydantic import ValidationError

from weatherhub.errors import EmptyForecastError, InvalidPayloadError
from weatherhub.ingest.open_meteo_client import OpenMeteoClient
from weatherhub.models.forecast import RawForecast
from weatherhub.models.location import Coordinates

logger = logging.getLogger(__name__)


class ForecastFetcher:
    def __init__(self, client: OpenMeteoClient):
        self.client = client

    def fetch(self, coords: Coordinates) -> RawForecast:
        """Fetch and parse the forecast for a coordinate pair.

        A null or empty payload raises EmptyForecastError: the call itself
        succeeded, so this is a broken upstream contract, not an outage.
        """
        raw = self.client.get_forecast(coords.latitude, coords.longitude)
        if raw is None:
            raise EmptyForecastError("Forecast API returned a null forecast")
        if not isinstance(raw, dict):
            raise InvalidPayloadError("Forecast API returned an unexpected payload")
        if not raw:
            raise EmptyForecastError("Forecast API returned an empty forecast")
        try:
            return RawForecast.model_validate(raw)
        except ValidationError as e:
            logger.error(
                "Forecast payload for %s failed validation: %s", coords.label(), e
            )
            raise InvalidPayloadError("Forecast API returned an unexpected payload") from e
