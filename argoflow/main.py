"""argoflow - command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from argoflow.constants.defaults import LOG_FORMAT_DEFAULT
from argoflow.models.state.app_settings import AppSettings, ConfigError
from argoflow.models.state.config_manager import ConfigManager
from argoflow.models.topology.stage_info import LayerConfig

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="argoflow",
        description="Live stage topology of Argo CD applications",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--config", type=str, help="Path to settings YAML file")
    parser.add_argument("--server", default=None, help="Argo CD API server URL")
    parser.add_argument("--token", default=None, help="Bearer token for the API")
    parser.add_argument("--layers", default=None, help="Path to layer table YAML file")
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Skip TLS certificate verification",
    )
    parser.add_argument(
        "--poll",
        action="store_true",
        help="Poll the application listing instead of streaming",
    )
    parser.add_argument("--log-file", default=None, help="Write logs to this file")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Log level (defaults to the settings file value)",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> AppSettings:
    """Load settings and apply command-line overrides on top."""
    settings = ConfigManager.load(Path(args.config).expanduser() if args.config else None)
    overrides: dict[str, object] = {}
    if args.server:
        overrides["server_url"] = args.server
    if args.token:
        overrides["auth_token"] = args.token
    if args.layers:
        overrides["layers_path"] = args.layers
    if args.insecure:
        overrides["verify_tls"] = False
    if args.poll:
        overrides["use_stream"] = False
    if args.log_file:
        overrides["log_file"] = args.log_file
    if args.log_level:
        overrides["log_level"] = args.log_level
    return settings.model_copy(update=overrides)


def load_layers(settings: AppSettings) -> list[LayerConfig]:
    path = Path(settings.layers_path).expanduser() if settings.layers_path else None
    return ConfigManager.load_layers(path)


def configure_logging(settings: AppSettings) -> None:
    """Send logs to a file; the terminal belongs to the TUI."""
    root = logging.getLogger()
    root.setLevel(settings.log_level.upper())
    if settings.log_file:
        handler: logging.Handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT_DEFAULT))
    else:
        handler = logging.NullHandler()
    root.addHandler(handler)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        settings = build_settings(args)
        layers = load_layers(settings)
    except ConfigError as exc:
        print(f"argoflow: {exc}", file=sys.stderr)
        return 2

    configure_logging(settings)
    logger.info("Starting with %d layers", len(layers))

    from argoflow.app import ArgoFlowApp

    ArgoFlowApp(settings, layers).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
