"""Command line entry point: print the merged configuration.

Usage:
    python -m src.layered_config --config-path ./config --profiles dev
"""
import argparse
import asyncio
import json
import logging
import os
import sys
from typing import List, Optional

import yaml

from src.layered_config.exceptions import LayeredConfigError
from src.layered_config.loader import ConfigLoader
from src.layered_config.settings import LoaderSettings, load_settings
from src.layered_config.utils.logging.factory import configure_logging


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="layered-config",
        description="Load layered application configuration and print it",
    )
    parser.add_argument("--config-path", help="Directory of application files (env: CONFIG_PATH)")
    parser.add_argument("--bootstrap-path", help="Directory of the bootstrap file (env: CONFIG_BOOTSTRAP_PATH)")
    parser.add_argument("--profiles", help="Comma-separated active profiles (env: ACTIVE_PROFILES)")
    parser.add_argument("--log-level", help="Log level (env: LOG_LEVEL)")
    parser.add_argument(
        "--format",
        choices=("json", "yaml"),
        default="json",
        help="Output format (default: json)",
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> LoaderSettings:
    """Build loader settings, flags taking priority over the environment.

    Raises:
        LayeredConfigError: If the settings are missing or invalid
    """
    overrides = {
        "config_path": args.config_path,
        "bootstrap_path": args.bootstrap_path,
        "active_profiles": args.profiles,
        "log_level": args.log_level,
    }
    return load_settings(**{key: value for key, value in overrides.items() if value is not None})


def render(document: dict, output_format: str) -> str:
    if output_format == "yaml":
        return yaml.safe_dump(document, sort_keys=False, default_flow_style=False)
    return json.dumps(document, indent=2, default=str)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        configure_logging(level=args.log_level or os.getenv("LOG_LEVEL") or "WARNING")
    except ValueError as e:
        parser.error(str(e))

    try:
        loader = ConfigLoader(settings=settings_from_args(args))
        document = asyncio.run(loader.load())
    except LayeredConfigError as e:
        logger.error("Configuration load failed", extra={"error": e.to_dict()})
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(render(document, args.format))
    return 0


if __name__ == "__main__":
    sys.exit(main())
