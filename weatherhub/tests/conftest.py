"""Shared test fixtures."""

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest
import yaml

from weatherhub.config.schema import ApiConfig, TransportConfig, WeatherConfig
from weatherhub.enrich.temporal import normalize
from weatherhub.models.forecast import EnrichedForecast, RawForecast

FIXTURE_DIR = Path(__file__).parent / "fixtures"

TEST_GEOCODING_URL = "https://test-geo.example.com/v1/search"
TEST_FORECAST_URL = "https://test-meteo.example.com/v1/forecast"
TEST_REVERSE_URL = "https://test-nominatim.example.com/reverse"


class FakeClock:
    """Monotonic clock stand-in that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def load_fixture(name: str) -> dict:
    with open(FIXTURE_DIR / name) as f:
        return json.load(f)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def default_config() -> WeatherConfig:
    return WeatherConfig()


@pytest.fixture
def test_config() -> WeatherConfig:
    """Config pointing at fake hosts, with retries that never sleep long."""
    return WeatherConfig(
        api=ApiConfig(
            geocoding_url=TEST_GEOCODING_URL,
            forecast_url=TEST_FORECAST_URL,
            reverse_geocoding_url=TEST_REVERSE_URL,
            user_agent="weatherhub-tests/0.1.0",
        ),
        transport=TransportConfig(max_retries=1, retry_base_delay=0.0),
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "cache": {"forecast_ttl_minutes": 5},
        "transport": {"max_retries": 1},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tokyo_payload() -> dict:
    return load_fixture("open_meteo_forecast_tokyo.json")


@pytest.fixture
def tokyo_raw(tokyo_payload: dict) -> RawForecast:
    return RawForecast.model_validate(tokyo_payload)


@pytest.fixture
def geocode_tokyo() -> dict:
    return load_fixture("open_meteo_geocode_tokyo.json")


@pytest.fixture
def reverse_shinjuku() -> dict:
    return load_fixture("nominatim_reverse_shinjuku.json")


@pytest.fixture
def tokyo_morning() -> datetime:
    # 05:00 JST on Monday 2024-06-03
    return datetime(2024, 6, 2, 20, 0, 0, tzinfo=UTC)


@pytest.fixture
def tokyo_forecast(tokyo_raw: RawForecast) -> EnrichedForecast:
    """Enriched Tokyo forecast built without any network or cache."""
    day = normalize(tokyo_raw)
    return EnrichedForecast(
        latitude=35.6895,
        longitude=139.69171,
        raw=tokyo_raw,
        city="Tokyo",
        day_name="Monday, 03 June 2024",
        min_temp=day.min_temp,
        max_temp=day.max_temp,
        min_temp_time=day.min_temp_time,
        max_temp_time=day.max_temp_time,
        today_entries=day.today_entries,
        current_time=day.current_time,
        event_forecast="Thunderstorm",
        alerts=("Severe storm risk",),
    )
