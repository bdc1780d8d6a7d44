"""YAML config loader and dotted-key lookup."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from weatherhub.config.schema import WeatherConfig


def load_config(path: str | Path | None = None) -> WeatherConfig:
    """Load and validate config from a YAML file.

    With no path, returns the built-in defaults. An empty file also
    yields defaults.
    """
    if path is None:
        return WeatherConfig()
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return WeatherConfig(**raw)


def get_config_value(config: WeatherConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'cache.forecast_ttl_minutes'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, (list, tuple)):
            obj = obj[int(part)]
        elif isinstance(obj, dict):
            obj = obj[part]
        elif isinstance(obj, BaseModel) and part in type(obj).model_fields:
            obj = getattr(obj, part)
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
