"""HTTP adapter: exposes GetWeather over FastAPI."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from weatherhub.config.schema import WeatherConfig
from weatherhub.models.forecast import EnrichedForecast
from weatherhub.pipeline.weather_orchestrator import WeatherOrchestrator


def create_app(
    config: WeatherConfig | None = None,
    orchestrator: WeatherOrchestrator | None = None,
) -> FastAPI:
    config = config or WeatherConfig()
    orchestrator = orchestrator or WeatherOrchestrator.from_config(config)

    app = FastAPI(title="weatherhub", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.server.cors_origins),
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.state.orchestrator = orchestrator

    @app.exception_handler(RequestValidationError)
    async def invalid_query(request: Request, exc: RequestValidationError):
        # Non-numeric lat/lon and the like: same 400 shape as the orchestrator.
        return JSONResponse(
            content={"error": "Invalid query parameters"}, status_code=400
        )

    @app.get("/api/weather")
    def get_weather(
        city: str | None = None,
        lat: float | None = None,
        lon: float | None = None,
    ):
        """Forecast for a city name or a lat/lon pair."""
        body, status_code = orchestrator.get_weather(city=city, lat=lat, lon=lon)
        if isinstance(body, EnrichedForecast):
            body = body.to_dict()
        return JSONResponse(content=body, status_code=status_code)

    @app.get("/api/reverse-geocode")
    def reverse_geocode(lat: float | None = None, lon: float | None = None):
        """Place name for a lat/lon pair, falling back to "lat,lon"."""
        body, status_code = orchestrator.reverse_geocode(lat=lat, lon=lon)
        return JSONResponse(content=body, status_code=status_code)

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return (
            "weatherhub is running. Try /api/weather?city=Tokyo "
            "or /api/weather?lat=35.6&lon=139.7"
        )

    return app


if __name__ == "__main__":
    import uvicorn

    _config = WeatherConfig()
    uvicorn.run(create_app(_config), host=_config.server.host, port=_config.server.port)
