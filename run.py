#!/usr/bin/env python3
"""
Serve the healthy food locator.

The search state lives in the server process, so the app always runs as a
single uvicorn process built from the settings loaded here.
"""

import os
import sys
import argparse

from foodlocator.config import Environment, Settings
from foodlocator.config.loader import ConfigLoader, load_config_for_environment


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Healthy Food Locator server")
    parser.add_argument(
        "--env",
        choices=[e.value for e in Environment],
        default=None,
        help="Settings environment; reads .env.<env> (default: $ENVIRONMENT or development)"
    )
    parser.add_argument("--host", default=None, help="Bind address")
    parser.add_argument("--port", type=int, default=None, help="Bind port")
    parser.add_argument("--debug", action="store_true", help="Run FastAPI in debug mode")
    parser.add_argument(
        "--list-envs",
        action="store_true",
        help="Show which .env.<env> files exist and exit"
    )
    parser.add_argument(
        "--create-sample",
        metavar="ENV",
        help="Write .env.<ENV>.sample with the current defaults and exit"
    )
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Fold command line flags into the loaded settings."""
    updates = {}
    if args.host:
        updates["host"] = args.host
    if args.port:
        updates["port"] = args.port
    if args.debug:
        updates["debug"] = True
    return settings.model_copy(update=updates) if updates else settings


def main():
    args = build_parser().parse_args()

    if args.list_envs:
        envs = ConfigLoader.get_available_environments()
        print("Environment files:" if envs else "No .env.<environment> files found")
        for env in envs:
            print(f"  - {env}")
        return

    if args.create_sample:
        try:
            sample_file = ConfigLoader.create_sample_env_file(args.create_sample)
        except (ValueError, OSError) as e:
            print(f"Could not write sample settings: {e}")
            sys.exit(1)
        print(f"Wrote {sample_file}")
        return

    try:
        settings = apply_overrides(load_config_for_environment(args.env), args)
    except ValueError as e:
        print(f"Invalid settings: {e}")
        sys.exit(1)

    print(f"{settings.app_name} v{settings.app_version} ({settings.environment.value})")
    print(f"   Listening on {settings.host}:{settings.port}")
    print(f"   Default place: {settings.search.default_place_name}")
    print(f"   Places API key: {'set' if settings.foursquare.api_key else 'missing'}")

    # foodlocator.main builds its module-level app on import; point it at the same file.
    os.environ["ENVIRONMENT"] = settings.environment.value

    import uvicorn
    from foodlocator.main import create_app

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.value.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    main()
