"""Tests for config schema validation."""

import pytest
from pydantic import ValidationError

from weatherhub.config.defaults import FORECAST_URL, GEOCODING_URL
from weatherhub.config.schema import (
    CacheConfig,
    ServerConfig,
    TransportConfig,
    WeatherConfig,
)


class TestWeatherConfig:
    def test_defaults(self):
        config = WeatherConfig()
        assert config.api.geocoding_url == GEOCODING_URL
        assert config.api.forecast_url == FORECAST_URL
        assert config.cache.coords_ttl_minutes == 30
        assert config.cache.forecast_ttl_minutes == 10
        assert config.transport.max_retries == 3

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            WeatherConfig(unknown_field="bad")

    def test_nested_extra_fields_rejected(self):
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            CacheConfig(forecast_ttl_minutes=10, bogus=True)

    def test_frozen(self):
        config = WeatherConfig()
        with pytest.raises(ValidationError):
            config.cache = CacheConfig(forecast_ttl_minutes=1)


class TestCacheConfig:
    def test_ttl_seconds(self):
        config = CacheConfig(coords_ttl_minutes=30, forecast_ttl_minutes=10)
        assert config.coords_ttl_seconds == 1800.0
        assert config.forecast_ttl_seconds == 600.0

    def test_ttl_must_be_positive(self):
        with pytest.raises(ValidationError):
            CacheConfig(forecast_ttl_minutes=0)


class TestTransportConfig:
    def test_bounds(self):
        with pytest.raises(ValidationError):
            TransportConfig(timeout_seconds=0)
        with pytest.raises(ValidationError):
            TransportConfig(max_retries=-1)
        with pytest.raises(ValidationError):
            TransportConfig(breaker_failure_threshold=0)

    def test_reverse_timeout(self):
        assert TransportConfig().reverse_timeout_seconds == 3.0
        with pytest.raises(ValidationError):
            TransportConfig(reverse_timeout_seconds=0)

    def test_zero_retries_allowed(self):
        assert TransportConfig(max_retries=0).max_retries == 0


class TestServerConfig:
    def test_port_bounds(self):
        with pytest.raises(ValidationError):
            ServerConfig(port=70000)

    def test_origins_from_list(self):
        config = ServerConfig(cors_origins=["http://localhost:3000"])
        assert config.cors_origins == ("http://localhost:3000",)
