"""JSON-over-HTTP transport with retry, backoff and circuit breaking."""

import logging
import threading
import time
from collections.abc import Callable
from typing import Any

import httpx

from weatherhub.config.schema import TransportConfig
from weatherhub.errors import InvalidPayloadError, UpstreamError

logger = logging.getLogger(__name__)

RETRYABLE_STATUSES = frozenset({408, 429, 500, 502, 503, 504})


class CircuitBreaker:
    """Opens after N consecutive failed attempts, half-opens after a cool-down."""

    def __init__(
        self,
        failure_threshold: int = 5,
        reset_seconds: float = 30.0,
        time_func: Callable[[], float] = time.monotonic,
    ):
        self.failure_threshold = failure_threshold
        self.reset_seconds = reset_seconds
        self._time_func = time_func
        self._failures = 0
        self._opened_at: float | None = None
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        with self._lock:
            return self._is_open_locked()

    def _is_open_locked(self) -> bool:
        if self._opened_at is None:
            return False
        return self._time_func() - self._opened_at < self.reset_seconds

    def allow(self) -> bool:
        """True when a call may go through (closed, or half-open trial)."""
        with self._lock:
            return not self._is_open_locked()

    def record_success(self) -> None:
        with self._lock:
            self._failures = 0
            self._opened_at = None

    def record_failure(self) -> None:
        with self._lock:
            self._failures += 1
            # A failed half-open trial re-opens immediately.
            if self._opened_at is not None or self._failures >= self.failure_threshold:
                self._opened_at = self._time_func()


class HttpFetcher:
    def __init__(
        self,
        timeout: float = 10.0,
        max_retries: int = 3,
        retry_base_delay: float = 2.0,
        breaker: CircuitBreaker | None = None,
    ):
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay
        self.breaker = breaker or CircuitBreaker()

    @classmethod
    def from_config(cls, config: TransportConfig) -> "HttpFetcher":
        return cls(
            timeout=config.timeout_seconds,
            max_retries=config.max_retries,
            retry_base_delay=config.retry_base_delay,
            breaker=CircuitBreaker(
                failure_threshold=config.breaker_failure_threshold,
                reset_seconds=config.breaker_reset_seconds,
            ),
        )

    @classmethod
    def best_effort(cls, config: TransportConfig) -> "HttpFetcher":
        """Single short attempt with a private breaker, for lookups that have a fallback."""
        return cls(
            timeout=config.reverse_timeout_seconds,
            max_retries=0,
            retry_base_delay=0.0,
            breaker=CircuitBreaker(
                failure_threshold=config.breaker_failure_threshold,
                reset_seconds=config.breaker_reset_seconds,
            ),
        )

    def get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET a URL and decode its JSON body.

        Retries transient failures (network errors, 408/429/5xx) with
        exponential backoff. An empty body or a JSON ``null`` is returned
        as ``None``.
        """
        for attempt in range(self.max_retries + 1):
            if not self.breaker.allow():
                logger.warning("Circuit open, refusing request to %s", url)
                raise UpstreamError(f"Upstream unavailable (circuit open): {url}")

            try:
                resp = httpx.get(url, params=params, headers=headers, timeout=self.timeout)
            except httpx.RequestError as e:
                self.breaker.record_failure()
                if attempt < self.max_retries:
                    self._backoff(attempt, url, f"request error: {e}")
                    continue
                logger.error("Request to %s failed after %d attempts: %s", url, attempt + 1, e)
                raise UpstreamError(f"Network error: {e}") from e

            if resp.status_code in RETRYABLE_STATUSES:
                self.breaker.record_failure()
                if attempt < self.max_retries:
                    self._backoff(attempt, url, f"status {resp.status_code}")
                    continue
                logger.error("%s returned %d after %d attempts", url, resp.status_code, attempt + 1)
                raise UpstreamError(f"Upstream returned HTTP {resp.status_code}")

            if resp.status_code >= 400:
                # Client errors are not transient and say nothing about upstream health.
                logger.error("%s returned %d: %s", url, resp.status_code, resp.text[:200])
                raise UpstreamError(f"Upstream returned HTTP {resp.status_code}")

            self.breaker.record_success()
            if not resp.content.strip():
                return None
            try:
                return resp.json()
            except ValueError as e:
                logger.error("Invalid JSON from %s: %s", url, e)
                raise InvalidPayloadError("Upstream returned invalid JSON") from e

        raise UpstreamError(f"Request to {url} failed")

    def _backoff(self, attempt: int, url: str, reason: str) -> None:
        delay = self.retry_base_delay * (2**attempt)
        logger.warning(
            "%s (%s), retrying in %.1fs (attempt %d/%d)",
            url, reason, delay, attempt + 1, self.max_retries,
        )
        time.sleep(delay)
