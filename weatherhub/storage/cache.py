"""In-memory TTL cache shared by the coordinate and forecast namespaces."""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

COORDS_PREFIX = "coords:"
FORECAST_PREFIX = "forecast:"
SWEEP_INTERVAL_SECONDS = 60.0


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    expires_at: float


class CacheStore:
    """Thread-safe TTL store.

    Expired entries are dropped on read, and writes sweep the whole store
    at most once per ``sweep_interval`` so keys that are never read again
    do not accumulate.
    """

    def __init__(
        self,
        time_func: Callable[[], float] = time.monotonic,
        sweep_interval: float = SWEEP_INTERVAL_SECONDS,
    ) -> None:
        self._time_func = time_func
        self._sweep_interval = sweep_interval
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._last_sweep = time_func()

    def get(self, key: str) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._time_func():
                del self._entries[key]
                return None
            return entry.value

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        with self._lock:
            now = self._time_func()
            if now - self._last_sweep >= self._sweep_interval:
                self._sweep_locked(now)
            self._entries[key] = CacheEntry(value, now + ttl_seconds)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _sweep_locked(self, now: float) -> None:
        expired = [k for k, e in self._entries.items() if e.expires_at <= now]
        for key in expired:
            del self._entries[key]
        self._last_sweep = now


def normalize_city_key(city: str) -> str:
    return city.strip().lower()


def coords_key(city: str) -> str:
    return f"{COORDS_PREFIX}{normalize_city_key(city)}"


def forecast_key(city: str | None, latitude: float | None, longitude: float | None) -> str:
    """Forecast key: the normalized city when one was given, else "lat:lon"."""
    if city is not None:
        return f"{FORECAST_PREFIX}{normalize_city_key(city)}"
    return f"{FORECAST_PREFIX}{latitude}:{longitude}"
