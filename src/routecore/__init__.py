"""routecore - convention-based route and schema discovery for HTTP services."""

from __future__ import annotations

# Core
from routecore.app import bootstrap, create_server, load_schemas_and_routes
from routecore.route import RouteDefinition
from routecore.server import Reply, RouteOptions, Server

# Config
from routecore.config import Config

# Discovery
from routecore.discovery import (
    BootReport,
    LoadFailure,
    RouteDescriptor,
    RouteLoader,
    RouteTable,
    SchemaDescriptor,
    SchemaLoader,
    SchemaTable,
    Version,
)

# Errors
from routecore.errors import (
    AliasConfigError,
    BootError,
    ConfigError,
    DirectoryError,
    DuplicateSchemaError,
    ErrorCodes,
    RouteConflictError,
    RouteCoreError,
    RouteLoadError,
    RouteValidationError,
    SchemaNotFoundError,
    SchemaParseError,
)

# Logging
from routecore.logs import configure_logging

__version__ = "0.1.0"

__all__ = [
    # Core
    "RouteDefinition",
    "Reply",
    "RouteOptions",
    "Server",
    "bootstrap",
    "create_server",
    "load_schemas_and_routes",
    # Config
    "Config",
    # Discovery
    "BootReport",
    "LoadFailure",
    "RouteDescriptor",
    "RouteLoader",
    "RouteTable",
    "SchemaDescriptor",
    "SchemaLoader",
    "SchemaTable",
    "Version",
    # Errors
    "ErrorCodes",
    "RouteCoreError",
    "AliasConfigError",
    "BootError",
    "ConfigError",
    "DirectoryError",
    "DuplicateSchemaError",
    "RouteConflictError",
    "RouteLoadError",
    "RouteValidationError",
    "SchemaNotFoundError",
    "SchemaParseError",
    # Logging
    "configure_logging",
]
