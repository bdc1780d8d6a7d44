"""CLI entry point for the weather resolution service."""

import argparse
import json
import logging

from weatherhub.config.loader import get_config_value, load_config
from weatherhub.enrich.event_classifier import classify
from weatherhub.models.forecast import EnrichedForecast
from weatherhub.pipeline.weather_orchestrator import WeatherOrchestrator
from weatherhub.reporting.formatters import format_forecast_json, format_forecast_text


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherhub",
        description="Resolve, enrich and serve weather forecasts",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # weather
    weather_p = sub.add_parser("weather", help="Fetch the enriched forecast")
    weather_p.add_argument("--city", help="City name (letters, spaces, hyphens)")
    weather_p.add_argument("--lat", type=float, help="Latitude")
    weather_p.add_argument("--lon", type=float, help="Longitude")
    weather_p.add_argument(
        "--json", action="store_true", help="Print the JSON body instead of text"
    )

    # classify
    classify_p = sub.add_parser("classify", help="Label a WMO weather code")
    classify_p.add_argument("code", type=int, help="WMO weather code")
    classify_p.add_argument("--temp", type=float, default=None, help="Temperature °C")

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display effective config")
    get_p = config_sub.add_parser("get", help="Display one config value")
    get_p.add_argument("key", help="Dotted key, e.g. cache.forecast_ttl_minutes")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "weather":
        return _cmd_weather(config, args)
    elif args.command == "classify":
        return _cmd_classify(args)
    elif args.command == "config":
        return _cmd_config(config, args)
    elif args.command == "serve":
        return _cmd_serve(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_weather(config, args) -> int:
    orchestrator = WeatherOrchestrator.from_config(config)
    body, status = orchestrator.get_weather(city=args.city, lat=args.lat, lon=args.lon)
    if not isinstance(body, EnrichedForecast):
        print(f"Error ({status}): {body['error']}")
        return 1
    if args.json:
        print(format_forecast_json(body))
    else:
        print(format_forecast_text(body))
    return 0


def _cmd_classify(args) -> int:
    result = classify(args.code, args.temp)
    print(f"Label: {result.label}")
    print(f"Alerts: {', '.join(result.alerts)}")
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            value = get_config_value(config, args.key)
        except (KeyError, IndexError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        if hasattr(value, "model_dump"):
            print(json.dumps(value.model_dump(mode="json"), indent=2))
        else:
            print(value)
        return 0
    else:
        print("Use: config show | config get KEY")
        return 1


def _cmd_serve(config, args) -> int:
    import uvicorn

    from weatherhub.api import create_app

    host = args.host or config.server.host
    port = args.port or config.server.port
    uvicorn.run(create_app(config), host=host, port=port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
