"""Read-only documentation endpoints over the published route and schema snapshots."""

from __future__ import annotations

import logging
from typing import Any, Callable

from routecore.discovery.types import RouteTable, SchemaTable
from routecore.errors import RouteCoreError
from routecore.server import Server

logger = logging.getLogger(__name__)

__all__ = [
    "routes_summary",
    "schemas_summary",
    "version_index",
    "publish_routes_documentation",
    "publish_schemas_documentation",
    "publish_version_indexes",
]

DEFAULT_ROUTES_PATH = "/api/routes"
DEFAULT_SCHEMAS_PATH = "/api/schemas"


def routes_summary(table: RouteTable) -> dict[str, Any]:
    return {
        "total": len(table),
        "versions": list(table.versions),
        "routes": [route.to_dict() for route in table],
    }


def schemas_summary(table: SchemaTable) -> dict[str, Any]:
    return {
        "total": len(table),
        "schemas": [schema.to_dict() for schema in table],
    }


def version_index(table: RouteTable, version: str) -> dict[str, Any]:
    endpoints = []
    for route in table.for_version(version):
        method = list(route.method) if isinstance(route.method, tuple) else route.method
        description = (route.documentation or {}).get("description") or ""
        endpoints.append({"url": route.url, "method": method, "description": description})
    return {"version": version, "endpoints": endpoints}


def _publish(server: Server, path: str, build: Callable[[], dict[str, Any]], what: str) -> bool:
    body = {"result": build()}

    def handler(request, reply):
        reply.send(body)

    try:
        server.get(path, handler)
    except RouteCoreError as e:
        logger.warning("Cannot register %s at %s: %s", what, path, e.message)
        return False
    logger.info("%s registered at %s", what, path)
    return True


def publish_routes_documentation(server: Server, table: RouteTable, path: str | None = None) -> bool:
    """Expose the route summary. Returns False if ``path`` was already taken."""
    return _publish(server, path or DEFAULT_ROUTES_PATH, lambda: routes_summary(table), "Routes documentation")


def publish_schemas_documentation(server: Server, table: SchemaTable, path: str | None = None) -> bool:
    """Expose the schema summary. Returns False if ``path`` was already taken."""
    return _publish(server, path or DEFAULT_SCHEMAS_PATH, lambda: schemas_summary(table), "Schemas documentation")


def publish_version_indexes(server: Server, table: RouteTable) -> list[str]:
    """Expose ``GET /<version>`` for every discovered version. Returns the registered paths."""
    registered = []
    for version in table.versions:
        path = f"/{version}"
        if _publish(server, path, lambda v=version: version_index(table, v), "Version index route"):
            registered.append(path)
    return registered
