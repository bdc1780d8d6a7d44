"""Location resolver: city name -> coordinates (cached) and coordinates -> display name."""

import logging
import math
import re

from pydantic import ValidationError

from weatherhub.errors import InputValidationError, InvalidPayloadError, NotFoundError
from weatherhub.ingest.nominatim_client import NominatimClient
from weatherhub.ingest.open_meteo_client import OpenMeteoClient
from weatherhub.models.location import Coordinates, GeoResponse, ReverseGeoResponse
from weatherhub.storage.cache import CacheStore, coords_key

logger = logging.getLogger(__name__)

CITY_NAME_PATTERN = re.compile(r"[A-Za-z\s-]+")
COORDS_TTL_SECONDS = 30 * 60


def validate_city_name(city: str) -> str:
    """Return the trimmed city name, or raise InputValidationError.

    Letters, spaces and hyphens only. Checked before any network call.
    """
    trimmed = city.strip()
    if not trimmed:
        raise InputValidationError("City name must not be empty")
    if not CITY_NAME_PATTERN.fullmatch(trimmed):
        raise InputValidationError(
            "City name may only contain letters, spaces and hyphens"
        )
    return trimmed


def validate_coordinates(latitude: float, longitude: float) -> Coordinates:
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise InputValidationError("Latitude and longitude must be finite numbers")
    if not -90.0 <= latitude <= 90.0:
        raise InputValidationError("Latitude must be between -90 and 90")
    if not -180.0 <= longitude <= 180.0:
        raise InputValidationError("Longitude must be between -180 and 180")
    return Coordinates(latitude=float(latitude), longitude=float(longitude))


class LocationResolver:
    def __init__(
        self,
        geocoder: OpenMeteoClient,
        reverse_geocoder: NominatimClient | None,
        cache: CacheStore,
        ttl_seconds: float = COORDS_TTL_SECONDS,
    ):
        self.geocoder = geocoder
        self.reverse_geocoder = reverse_geocoder
        self.cache = cache
        self.ttl_seconds = ttl_seconds

    def resolve(self, city: str) -> Coordinates:
        """Resolve a city name to the first geocoding match.

        Raises NotFoundError when the geocoder has no results. Transport
        failures propagate as UpstreamError; nothing is retried here.
        """
        key = coords_key(city)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Coordinates cache hit for %s", key)
            return cached

        raw = self.geocoder.search(city.strip(), count=1)
        try:
            response = GeoResponse.model_validate(raw) if raw is not None else GeoResponse()
        except ValidationError as e:
            raise InvalidPayloadError("Geocoding API returned an unexpected payload") from e

        if not response.results:
            logger.warning("City not found: %s", city)
            raise NotFoundError("City not found")

        coords = response.results[0].coordinates()
        self.cache.set(key, coords, self.ttl_seconds)
        logger.info(
            "Resolved %r to %s,%s", city, coords.latitude, coords.longitude
        )
        return coords

    def display_name(self, coords: Coordinates) -> str:
        """Best-effort place name for coordinates. Never raises.

        Falls back to the raw "lat,lon" text on any failure.
        """
        if self.reverse_geocoder is None:
            return coords.label()
        try:
            raw = self.reverse_geocoder.reverse(coords.latitude, coords.longitude)
            if raw is None:
                return coords.label()
            name = ReverseGeoResponse.model_validate(raw).display_name()
        except Exception:
            logger.warning(
                "Reverse geocoding failed for %s", coords.label(), exc_info=True
            )
            return coords.label()
        return name or coords.label()
