"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from weatherhub.config.defaults import (
    DEFAULT_USER_AGENT,
    FORECAST_URL,
    GEOCODING_URL,
    REVERSE_GEOCODING_URL,
)


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    geocoding_url: str = GEOCODING_URL
    forecast_url: str = FORECAST_URL
    reverse_geocoding_url: str = REVERSE_GEOCODING_URL
    user_agent: str = DEFAULT_USER_AGENT


class TransportConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    timeout_seconds: float = Field(default=10.0, gt=0.0)
    max_retries: int = Field(default=3, ge=0)
    retry_base_delay: float = Field(default=2.0, ge=0.0)
    breaker_failure_threshold: int = Field(default=5, ge=1)
    breaker_reset_seconds: float = Field(default=30.0, gt=0.0)
    # Reverse geocoding is best-effort: one short attempt, its own breaker.
    reverse_timeout_seconds: float = Field(default=3.0, gt=0.0)


class CacheConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    coords_ttl_minutes: int = Field(default=30, ge=1)
    forecast_ttl_minutes: int = Field(default=10, ge=1)

    @property
    def coords_ttl_seconds(self) -> float:
        return self.coords_ttl_minutes * 60.0

    @property
    def forecast_ttl_seconds(self) -> float:
        return self.forecast_ttl_minutes * 60.0


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    cors_origins: tuple[str, ...] = ("*",)


class WeatherConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    api: ApiConfig = ApiConfig()
    transport: TransportConfig = TransportConfig()
    cache: CacheConfig = CacheConfig()
    server: ServerConfig = ServerConfig()
