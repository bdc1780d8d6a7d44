"""Error taxonomy shared by the resolution pipeline and its collaborators."""


class WeatherError(Exception):
    """Base error. Carries the HTTP-equivalent status and a client-safe message."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_body(self) -> dict[str, str]:
        return {"error": self.message}


class InputValidationError(WeatherError):
    """Malformed city name or missing/invalid coordinates."""

    status_code = 400


class NotFoundError(WeatherError):
    """Geocoding returned no results."""

    status_code = 404


class EmptyForecastError(WeatherError):
    """Forecast call succeeded but the payload was null or empty."""

    status_code = 500


class InvalidPayloadError(WeatherError):
    """Upstream body was not JSON or did not match the expected shape."""

    status_code = 500


class UpstreamError(WeatherError):
    """Network/transport failure talking to an upstream provider."""

    status_code = 503
