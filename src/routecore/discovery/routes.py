"""Route discovery and registration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from routecore.config import Config
from routecore.discovery.aliases import expand_aliases
from routecore.discovery.docs import publish_routes_documentation, publish_version_indexes
from routecore.discovery.entry_point import import_route_file, module_name_for, resolve_route_factory
from routecore.discovery.types import FileOutcome, LoadFailure, RouteDescriptor, RouteTable
from routecore.discovery.validation import validate_route
from routecore.discovery.versioning import UNVERSIONED, Version, prefix_url, route_version_rule
from routecore.discovery.walker import walk_tree
from routecore.errors import BootError, RouteCoreError, RouteLoadError, RouteValidationError
from routecore.logs import Stopwatch
from routecore.server import RouteOptions, Server

logger = logging.getLogger(__name__)

__all__ = ["RouteLoader", "ROUTE_EXTENSION", "HOOK_NAMES"]

ROUTE_EXTENSION = ".py"
HOOK_NAMES = ("before_handler", "on_send", "on_response")

_SKIP_DIR_NAMES = {"__pycache__"}


def _hook(definition: Any, name: str) -> Callable[..., Any] | None:
    fn = getattr(definition, name, None)
    return fn if callable(fn) else None


def _format_method(method: str | list[str]) -> str:
    return method if isinstance(method, str) else ",".join(method)


class RouteLoader:
    """Discovers route definitions under the routes root and registers them.

    Descriptors accumulate in a private builder during ``load_routes()``;
    the published ``RouteTable`` is immutable.
    """

    def __init__(
        self,
        server: Server,
        config: Config | None = None,
        routes_dir: str | Path | None = None,
    ) -> None:
        self._server = server
        self._config = config or Config()
        root = routes_dir if routes_dir is not None else self._config.get("routes.root")
        self._routes_dir = Path(root).resolve()

        self._routes: list[RouteDescriptor] = []
        self._versions: dict[str, None] = {}
        self._failures: list[LoadFailure] = []
        self._table: RouteTable | None = None

    @property
    def routes_dir(self) -> Path:
        return self._routes_dir

    @property
    def table(self) -> RouteTable:
        """The published route snapshot (empty until ``load_routes()`` completes)."""
        return self._table if self._table is not None else RouteTable()

    @property
    def failures(self) -> tuple[LoadFailure, ...]:
        return tuple(self._failures)

    def get_routes(self) -> tuple[RouteDescriptor, ...]:
        return self.table.routes

    def get_versions(self) -> tuple[str, ...]:
        return self.table.versions

    # ----- Boot -----

    def load_routes(self) -> RouteTable:
        """Scan the routes root, register every valid route, publish the snapshot and docs.

        Raises:
            BootError: If the routes root is missing and cannot be created.
        """
        if self._table is not None:
            raise BootError(message="Routes already loaded")
        timer = Stopwatch()
        logger.info("Loading routes from %s", self._routes_dir)
        self._ensure_routes_dir()

        entries = walk_tree(
            self._routes_dir,
            extensions=[ROUTE_EXTENSION],
            hidden_prefixes=(".", "_"),
            skip_dir_names=_SKIP_DIR_NAMES,
            version_rule=route_version_rule,
            max_depth=self._config.get("routes.max_depth"),
            follow_symlinks=self._config.get("routes.follow_symlinks", False),
        )
        for entry in entries:
            self._collect(self.process_file(entry.path, entry.relative, entry.version))

        table = self.publish()
        if self._config.get("api.documentation", True):
            publish_routes_documentation(self._server, table, self._config.get("api.routes_documentation_path"))
        if self._config.get("api.version_index", True):
            publish_version_indexes(self._server, table)

        logger.info("Loaded %d routes in %sms", len(table), timer.duration())
        return table

    def _ensure_routes_dir(self) -> None:
        if self._routes_dir.is_dir():
            return
        try:
            self._routes_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BootError(message=f"Cannot create routes directory {self._routes_dir}: {e}", cause=e) from e
        logger.info("Created routes directory: %s", self._routes_dir)

    def publish(self) -> RouteTable:
        """Freeze the builder into the route snapshot. Later calls return the same table."""
        if self._table is None:
            self._table = RouteTable(routes=tuple(self._routes), versions=tuple(self._versions))
        return self._table

    def _collect(self, outcome: FileOutcome) -> None:
        self._routes.extend(outcome.descriptors)
        self._failures.extend(outcome.failures)

    # ----- Per-file processing -----

    def process_file(self, path: Path, relative: Path | None = None, version: Version = UNVERSIONED) -> FileOutcome:
        """Load, validate and register the route defined in one file.

        Never raises: every failure is logged and returned in the outcome.
        """
        source = str(path)
        timer = Stopwatch()
        logger.debug("Processing route: '%s'", source)

        if path.suffix != ROUTE_EXTENSION:
            logger.warning("Skipping non-Python file: %s", source)
            error = RouteLoadError(source=source, reason="not a Python file")
            return FileOutcome(source=source, failures=(LoadFailure(source, "extension", error),))

        try:
            name = module_name_for(relative) if relative is not None else None
            factory = resolve_route_factory(import_route_file(path, name), source)
        except RouteLoadError as e:
            logger.error("Failed to load route file %s: %s", source, e.message)
            return FileOutcome(source=source, failures=(LoadFailure(source, "load", e),))

        outcome = self._instantiate(factory, source, version)
        logger.debug("Route '%s' processed in %sms", source, timer.duration())
        return outcome

    def add(self, factory: Callable[..., Any], source: str, version: Version | str | None = None) -> FileOutcome:
        """Register a route definition explicitly instead of discovering it.

        ``factory`` is a ``RouteDefinition`` subclass or any callable taking
        the server. Must be called before the table is published.
        """
        if self._table is not None:
            raise BootError(message="Route table already published; no further routes can be added")
        if not isinstance(version, Version):
            version = Version(version.lower()) if version else UNVERSIONED
        outcome = self._instantiate(factory, source, version)
        self._collect(outcome)
        return outcome

    def _instantiate(self, factory: Callable[..., Any], source: str, version: Version) -> FileOutcome:
        try:
            definition = factory(self._server)
        except Exception as e:
            error = RouteLoadError(source=source, reason=f"Failed to instantiate: {e}", cause=e)
            logger.error("Failed to instantiate route %s: %s", source, e)
            return FileOutcome(source=source, failures=(LoadFailure(source, "instantiate", error),))

        try:
            return self._register_definition(definition, source, version)
        except Exception as e:
            error = RouteLoadError(source=source, reason=str(e), cause=e)
            logger.error("Error processing route %s: %s", source, e)
            return FileOutcome(source=source, failures=(LoadFailure(source, "register", error),))

    def _register_definition(self, definition: Any, source: str, version: Version) -> FileOutcome:
        errors = validate_route(definition)
        if errors:
            error = RouteValidationError(source=source, errors=errors)
            logger.error("Invalid route configuration in %s: %s", source, "; ".join(errors))
            return FileOutcome(source=source, failures=(LoadFailure(source, "validate", error),))

        config = definition.config
        url = prefix_url(config["url"], version)
        config["url"] = url
        if version:
            self._versions.setdefault(version.token, None)
        method = config["method"]

        options = RouteOptions(
            url=url,
            method=method,
            handler=definition.handler,
            before_handler=_hook(definition, "before_handler"),
            on_send=_hook(definition, "on_send"),
            on_response=_hook(definition, "on_response"),
            config=dict(config),
        )

        logger.info("Registering %s for %s", url, _format_method(method))
        try:
            self._server.route(options)
        except RouteCoreError as e:
            logger.error("Failed to register route %s from %s: %s", url, source, e.message)
            return FileOutcome(source=source, failures=(LoadFailure(source, "register", e),))

        canonical = RouteDescriptor(
            source_path=source,
            url=url,
            method=method if isinstance(method, str) else tuple(method),
            version=version.token,
            documentation=self._documentation_of(definition, source),
        )
        descriptors: list[RouteDescriptor] = [canonical]
        failures: list[LoadFailure] = []

        if config.get("alias") is not None:
            alias_descriptors, alias_failures = expand_aliases(self._server, options, canonical, version, source)
            descriptors.extend(alias_descriptors)
            failures.extend(alias_failures)

        return FileOutcome(source=source, descriptors=tuple(descriptors), failures=tuple(failures))

    @staticmethod
    def _documentation_of(definition: Any, source: str) -> dict[str, Any] | None:
        get_documentation = getattr(definition, "get_documentation", None)
        if not callable(get_documentation):
            return None
        try:
            docs = get_documentation()
        except Exception as e:
            logger.warning("get_documentation() failed for %s: %s", source, e)
            return None
        return dict(docs) if docs else None
