"""Tests for city validation, geocoding and reverse geocoding."""

import math
from unittest.mock import MagicMock

import pytest

from weatherhub.errors import (
    InputValidationError,
    InvalidPayloadError,
    NotFoundError,
    UpstreamError,
)
from weatherhub.ingest.location_resolver import (
    LocationResolver,
    validate_city_name,
    validate_coordinates,
)
from weatherhub.ingest.nominatim_client import NominatimClient
from weatherhub.ingest.open_meteo_client import OpenMeteoClient
from weatherhub.models.location import Coordinates
from weatherhub.storage.cache import CacheStore
from weatherhub.tests.conftest import FakeClock


@pytest.fixture
def geocoder() -> MagicMock:
    return MagicMock(spec=OpenMeteoClient)


@pytest.fixture
def reverse_geocoder() -> MagicMock:
    return MagicMock(spec=NominatimClient)


@pytest.fixture
def cache(fake_clock: FakeClock) -> CacheStore:
    return CacheStore(time_func=fake_clock)


@pytest.fixture
def resolver(geocoder, reverse_geocoder, cache) -> LocationResolver:
    return LocationResolver(geocoder, reverse_geocoder, cache, ttl_seconds=1800)


class TestValidateCityName:
    @pytest.mark.parametrize("city", ["Tokyo", "New York", "Saint-Etienne", "  Paris  "])
    def test_valid(self, city: str):
        assert validate_city_name(city) == city.strip()

    @pytest.mark.parametrize("city", ["", "   ", "\t"])
    def test_empty(self, city: str):
        with pytest.raises(InputValidationError, match="must not be empty"):
            validate_city_name(city)

    @pytest.mark.parametrize("city", ["Tokyo1", "São Paulo", "Paris;DROP", "St. Louis"])
    def test_invalid_characters(self, city: str):
        with pytest.raises(InputValidationError, match="letters, spaces and hyphens"):
            validate_city_name(city)


class TestValidateCoordinates:
    def test_valid(self):
        assert validate_coordinates(35, 139) == Coordinates(35.0, 139.0)

    @pytest.mark.parametrize(
        "lat,lon",
        [(91.0, 0.0), (-90.5, 0.0), (0.0, 180.5), (math.nan, 0.0), (0.0, math.inf)],
    )
    def test_invalid(self, lat: float, lon: float):
        with pytest.raises(InputValidationError):
            validate_coordinates(lat, lon)


class TestResolve:
    def test_first_result(self, resolver, geocoder, geocode_tokyo):
        geocoder.search.return_value = geocode_tokyo
        coords = resolver.resolve("Tokyo")
        assert coords == Coordinates(35.6895, 139.69171)
        geocoder.search.assert_called_once_with("Tokyo", count=1)

    def test_cache_hit_skips_geocoder(self, resolver, geocoder, geocode_tokyo):
        geocoder.search.return_value = geocode_tokyo
        first = resolver.resolve("Tokyo")
        second = resolver.resolve("  tokyo ")
        assert first == second
        assert geocoder.search.call_count == 1

    def test_cache_expires(self, resolver, geocoder, geocode_tokyo, fake_clock):
        geocoder.search.return_value = geocode_tokyo
        resolver.resolve("Tokyo")
        fake_clock.advance(1800)
        resolver.resolve("Tokyo")
        assert geocoder.search.call_count == 2

    @pytest.mark.parametrize("payload", [{}, {"results": []}, {"results": None}, None])
    def test_not_found(self, resolver, geocoder, payload):
        geocoder.search.return_value = payload
        with pytest.raises(NotFoundError, match="City not found"):
            resolver.resolve("Atlantis")

    def test_not_found_is_not_cached(self, resolver, geocoder, cache):
        geocoder.search.return_value = {}
        with pytest.raises(NotFoundError):
            resolver.resolve("Atlantis")
        assert len(cache) == 0

    def test_malformed_payload(self, resolver, geocoder):
        geocoder.search.return_value = {"results": [{"name": "no coords"}]}
        with pytest.raises(InvalidPayloadError):
            resolver.resolve("Tokyo")

    def test_upstream_error_propagates(self, resolver, geocoder):
        geocoder.search.side_effect = UpstreamError("Network error: boom")
        with pytest.raises(UpstreamError):
            resolver.resolve("Tokyo")


class TestDisplayName:
    def test_city_from_address(self, resolver, reverse_geocoder, reverse_shinjuku):
        reverse_geocoder.reverse.return_value = reverse_shinjuku
        assert resolver.display_name(Coordinates(35.69, 139.7)) == "Shinjuku"

    @pytest.mark.parametrize(
        "address,expected",
        [
            ({"town": "Hakone", "state": "Kanagawa"}, "Hakone"),
            ({"village": "Shirakawa"}, "Shirakawa"),
            ({"state": "Hokkaido"}, "Hokkaido"),
        ],
    )
    def test_fallback_order(self, resolver, reverse_geocoder, address, expected):
        reverse_geocoder.reverse.return_value = {"address": address}
        assert resolver.display_name(Coordinates(1.0, 2.0)) == expected

    def test_no_address_falls_back_to_label(self, resolver, reverse_geocoder):
        reverse_geocoder.reverse.return_value = {"error": "Unable to geocode"}
        assert resolver.display_name(Coordinates(0.0, -160.5)) == "0.0,-160.5"

    def test_failure_falls_back_to_label(self, resolver, reverse_geocoder):
        reverse_geocoder.reverse.side_effect = UpstreamError("Network error: boom")
        assert resolver.display_name(Coordinates(35.0, 139.0)) == "35.0,139.0"

    def test_null_body_falls_back_to_label(self, resolver, reverse_geocoder):
        reverse_geocoder.reverse.return_value = None
        assert resolver.display_name(Coordinates(35.0, 139.0)) == "35.0,139.0"

    def test_without_reverse_geocoder(self, geocoder, cache):
        resolver = LocationResolver(geocoder, None, cache)
        assert resolver.display_name(Coordinates(35.0, 139.0)) == "35.0,139.0"
