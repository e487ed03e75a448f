"""Command-line entry point: ``routecore -p 8080``."""

from __future__ import annotations

import argparse
import logging
import os
import sys

import uvicorn

from routecore import __version__
from routecore.app import bootstrap
from routecore.config import Config
from routecore.errors import RouteCoreError
from routecore.logs import configure_logging

logger = logging.getLogger(__name__)

__all__ = ["build_parser", "resolve_config", "main"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="routecore", description="Serve routes discovered from a directory tree.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-p", "--port", type=int, help="port to listen on (default: $PORT or 8000)")
    parser.add_argument("--host", help="interface to bind")
    parser.add_argument("-c", "--config", help="path to a YAML config file")
    parser.add_argument("--routes-dir", help="routes root directory")
    parser.add_argument("--schemas-dir", help="schemas root directory")
    parser.add_argument("--log-level", choices=["debug", "info", "warning", "error"], help="log level")
    return parser


def resolve_config(args: argparse.Namespace, environ: dict[str, str] | None = None) -> Config:
    """Merge the config file, ``PORT`` from the environment, and CLI flags, in that order."""
    environ = os.environ if environ is None else environ
    config = Config.load(args.config) if args.config else Config()

    env_port = environ.get("PORT")
    return config.with_overrides(
        {
            "server.port": args.port if args.port is not None else (int(env_port) if env_port else None),
            "server.host": args.host,
            "routes.root": args.routes_dir,
            "schemas.root": args.schemas_dir,
            "logging.level": args.log_level,
        }
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = resolve_config(args)
    except (RouteCoreError, ValueError) as e:
        print(f"routecore: {e}", file=sys.stderr)
        return 2

    configure_logging(config.get("logging.level"), config.get("logging.format"))
    try:
        server, report = bootstrap(config)
    except RouteCoreError as e:
        logger.error("Boot failed: %s", e)
        return 1

    host = config.get("server.host")
    port = int(config.get("server.port"))
    logger.info("Successfully booted (%s); listening on %s:%d", report.summary(), host, port)
    uvicorn.run(server.app, host=host, port=port, log_level=config.get("logging.level"), access_log=False)
    return 0
