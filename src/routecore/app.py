"""Application bootstrap: server creation and the discovery pass."""

from __future__ import annotations

import logging

from routecore.config import Config
from routecore.discovery.routes import RouteLoader
from routecore.discovery.schemas import SchemaLoader
from routecore.discovery.types import BootReport
from routecore.logs import Stopwatch
from routecore.server import Server

logger = logging.getLogger(__name__)

__all__ = ["bootstrap", "create_server", "load_schemas_and_routes"]


def create_server(config: Config, name: str = "routecore") -> Server:
    return Server(name=name, access_log=bool(config.get("logging.access_log", True)))


def load_schemas_and_routes(server: Server, config: Config) -> BootReport:
    """Run schema discovery, then route discovery, and report the outcome.

    Schemas load first so route schemas can reference them by id.

    Raises:
        BootError: If the routes directory is missing and cannot be created.
        DuplicateSchemaError: If two schemas share an id under the ``"error"`` policy.
    """
    timer = Stopwatch()
    schema_loader = SchemaLoader(server, config)
    schemas = schema_loader.load_schemas()

    route_loader = RouteLoader(server, config)
    routes = route_loader.load_routes()

    report = BootReport(
        routes=routes,
        schemas=schemas,
        failures=schema_loader.failures + route_loader.failures,
        duration_ms=timer.duration(),
    )
    if report.failures:
        logger.warning("Boot completed with %d failures", len(report.failures))
        for failure in report.failures:
            logger.warning("  [%s] %s: %s", failure.stage, failure.source, failure.message)
    logger.info("Boot summary: %s", report.summary())
    return report


def bootstrap(config: Config | None = None) -> tuple[Server, BootReport]:
    """Create a server and run the discovery pass over it."""
    config = config or Config()
    server = create_server(config)
    report = load_schemas_and_routes(server, config)
    return server, report
