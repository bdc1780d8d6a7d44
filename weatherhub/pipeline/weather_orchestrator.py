"""Weather orchestration: resolve location, serve from cache or fetch, normalize, classify."""

import logging
from collections.abc import Callable
from datetime import datetime

from weatherhub.config.schema import WeatherConfig
from weatherhub.enrich.event_classifier import classify
from weatherhub.enrich.temporal import day_name, normalize, utc_offset
from weatherhub.errors import InputValidationError, WeatherError
from weatherhub.ingest.forecast_fetcher import ForecastFetcher
from weatherhub.ingest.http_fetch import HttpFetcher
from weatherhub.ingest.location_resolver import (
    LocationResolver,
    validate_city_name,
    validate_coordinates,
)
from weatherhub.ingest.nominatim_client import NominatimClient
from weatherhub.ingest.open_meteo_client import OpenMeteoClient
from weatherhub.models.common import utc_now
from weatherhub.models.forecast import EnrichedForecast, RawForecast
from weatherhub.models.location import Coordinates
from weatherhub.storage.cache import CacheStore, forecast_key

logger = logging.getLogger(__name__)

FORECAST_TTL_SECONDS = 10 * 60
MISSING_LOCATION = "Either city or lat/lon must be provided"
MISSING_COORDINATES = "Latitude and longitude are required"
UNEXPECTED_ERROR = "Unexpected error while fetching weather"

ErrorBody = dict[str, str]


class WeatherOrchestrator:
    def __init__(
        self,
        resolver: LocationResolver,
        fetcher: ForecastFetcher,
        cache: CacheStore,
        forecast_ttl_seconds: float = FORECAST_TTL_SECONDS,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.resolver = resolver
        self.fetcher = fetcher
        self.cache = cache
        self.forecast_ttl_seconds = forecast_ttl_seconds
        self.clock = clock

    @classmethod
    def from_config(
        cls, config: WeatherConfig, cache: CacheStore | None = None
    ) -> "WeatherOrchestrator":
        """Wire the default Open-Meteo/Nominatim collaborators around one shared cache."""
        http = HttpFetcher.from_config(config.transport)
        open_meteo = OpenMeteoClient(
            http,
            geocoding_url=config.api.geocoding_url,
            forecast_url=config.api.forecast_url,
        )
        nominatim = NominatimClient(
            HttpFetcher.best_effort(config.transport),
            base_url=config.api.reverse_geocoding_url,
            user_agent=config.api.user_agent,
        )
        cache = cache if cache is not None else CacheStore()
        resolver = LocationResolver(
            open_meteo, nominatim, cache, ttl_seconds=config.cache.coords_ttl_seconds
        )
        return cls(
            resolver,
            ForecastFetcher(open_meteo),
            cache,
            forecast_ttl_seconds=config.cache.forecast_ttl_seconds,
        )

    def get_weather(
        self,
        city: str | None = None,
        lat: float | None = None,
        lon: float | None = None,
    ) -> tuple[EnrichedForecast | ErrorBody, int]:
        """Return ``(forecast, 200)`` or ``({"error": ...}, status)``.

        A non-blank city wins and lat/lon are ignored; a blank city counts
        as absent. Nothing escapes unclassified: unexpected failures become
        a generic 500.
        """
        try:
            return self._get_weather(city, lat, lon), 200
        except WeatherError as e:
            if e.status_code >= 500:
                logger.error("Weather request failed (%d): %s", e.status_code, e.message)
            else:
                logger.info("Weather request rejected (%d): %s", e.status_code, e.message)
            return e.to_body(), e.status_code
        except Exception:
            logger.exception("Unexpected error in weather orchestration")
            return {"error": UNEXPECTED_ERROR}, 500

    def reverse_geocode(
        self, lat: float | None = None, lon: float | None = None
    ) -> tuple[dict[str, str], int]:
        """Return ``({"city": name}, 200)`` for a coordinate pair.

        Uses the same best-effort lookup as coordinate forecasts, so an
        unknown place yields the "lat,lon" label rather than an error.
        """
        if lat is None or lon is None:
            return {"error": MISSING_COORDINATES}, 400
        try:
            coords = validate_coordinates(lat, lon)
        except InputValidationError as e:
            return e.to_body(), e.status_code
        return {"city": self.resolver.display_name(coords)}, 200

    def _get_weather(
        self, city: str | None, lat: float | None, lon: float | None
    ) -> EnrichedForecast:
        known_name = None
        if city is not None and city.strip():
            city = validate_city_name(city)
            coords = self.resolver.resolve(city)
            known_name = city
        elif lat is not None and lon is not None:
            coords = validate_coordinates(lat, lon)
        else:
            raise InputValidationError(MISSING_LOCATION)

        key = forecast_key(known_name, coords.latitude, coords.longitude)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Forecast cache hit for %s", key)
            return cached

        logger.info("Forecast cache miss for %s, fetching upstream", key)
        raw = self.fetcher.fetch(coords)
        forecast = self._enrich(raw, coords, known_name)
        self.cache.set(key, forecast, self.forecast_ttl_seconds)
        return forecast

    def _enrich(
        self, raw: RawForecast, coords: Coordinates, known_name: str | None
    ) -> EnrichedForecast:
        day = normalize(raw)
        for warning in day.warnings:
            logger.warning("Forecast for %s: %s", coords.label(), warning.value)

        # Day-level summary: current conditions' code against the day's high.
        current = raw.current_weather
        code = current.weathercode if current is not None else None
        temperature = day.max_temp
        if temperature is None and current is not None:
            temperature = current.temperature
        summary = classify(code, temperature)

        name = known_name or self.resolver.display_name(coords)

        return EnrichedForecast(
            latitude=coords.latitude,
            longitude=coords.longitude,
            raw=raw,
            city=name,
            day_name=day_name(self.clock(), utc_offset(raw)),
            min_temp=day.min_temp,
            max_temp=day.max_temp,
            min_temp_time=day.min_temp_time,
            max_temp_time=day.max_temp_time,
            today_entries=day.today_entries,
            current_time=day.current_time,
            event_forecast=summary.label,
            alerts=summary.alerts,
        )
