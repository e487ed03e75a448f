"""Route and schema discovery.

Usage::

    from routecore.discovery import RouteLoader, SchemaLoader

    schemas = SchemaLoader(server, config).load_schemas()
    routes = RouteLoader(server, config).load_routes()
"""

from __future__ import annotations

from routecore.discovery.aliases import alias_urls, expand_aliases
from routecore.discovery.docs import (
    publish_routes_documentation,
    publish_schemas_documentation,
    publish_version_indexes,
    routes_summary,
    schemas_summary,
    version_index,
)
from routecore.discovery.routes import RouteLoader
from routecore.discovery.schemas import SchemaLoader
from routecore.discovery.types import (
    BootReport,
    FileOutcome,
    LoadFailure,
    RouteDescriptor,
    RouteTable,
    SchemaDescriptor,
    SchemaTable,
)
from routecore.discovery.validation import validate_route
from routecore.discovery.versioning import (
    UNVERSIONED,
    Version,
    extract_route_version,
    extract_schema_version,
    prefix_url,
)
from routecore.discovery.walker import WalkEntry, walk_tree

__all__ = [
    "BootReport",
    "FileOutcome",
    "LoadFailure",
    "RouteDescriptor",
    "RouteLoader",
    "RouteTable",
    "SchemaDescriptor",
    "SchemaLoader",
    "SchemaTable",
    "UNVERSIONED",
    "Version",
    "WalkEntry",
    "alias_urls",
    "expand_aliases",
    "extract_route_version",
    "extract_schema_version",
    "prefix_url",
    "publish_routes_documentation",
    "publish_schemas_documentation",
    "publish_version_indexes",
    "routes_summary",
    "schemas_summary",
    "validate_route",
    "version_index",
    "walk_tree",
]
