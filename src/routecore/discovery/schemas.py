"""Schema discovery: load JSON/YAML schema documents and register them by id."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from routecore.config import Config
from routecore.discovery.docs import publish_schemas_documentation
from routecore.discovery.types import FileOutcome, LoadFailure, SchemaDescriptor, SchemaTable
from routecore.discovery.versioning import UNVERSIONED, Version, schema_version_rule
from routecore.discovery.walker import WalkEntry, walk_tree
from routecore.errors import (
    BootError,
    DirectoryError,
    DuplicateSchemaError,
    RouteCoreError,
    SchemaParseError,
)
from routecore.logs import Stopwatch
from routecore.server import Server

logger = logging.getLogger(__name__)

__all__ = ["SchemaLoader", "SCHEMA_EXTENSIONS", "parse_schema_document", "resolve_schema_id"]

SCHEMA_EXTENSIONS = (".json", ".yaml", ".yml")


def parse_schema_document(content: str, suffix: str, name: str) -> dict[str, Any]:
    """Parse schema file content as JSON or YAML depending on ``suffix``.

    Raises:
        SchemaParseError: If the content is malformed or not a mapping.
    """
    try:
        if suffix.lower() == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SchemaParseError(message=f"Failed to parse schema {name}: {e}", cause=e) from e

    if not isinstance(data, dict):
        raise SchemaParseError(message=f"Schema {name} is empty or not a mapping")
    return data


def resolve_schema_id(document: dict[str, Any], file_name: str, version: Version) -> tuple[str, bool]:
    """Final registration id for a document and whether it had to be synthesized.

    Raises:
        SchemaParseError: If the document declares a non-string ``$id``.
    """
    raw_id = document.get("$id", document.get("id"))
    if raw_id is not None and not isinstance(raw_id, str):
        raise SchemaParseError(message=f"Schema {file_name} has a non-string $id: {raw_id!r}")

    synthesized = not raw_id
    schema_id = Path(file_name).stem if synthesized else raw_id
    if version and not schema_id.startswith(version.token):
        schema_id = f"{version.token}-{schema_id}"
    return schema_id, synthesized


class SchemaLoader:
    """Discovers schema documents under the schemas root and registers them with the server."""

    def __init__(
        self,
        server: Server,
        config: Config | None = None,
        schemas_dir: str | Path | None = None,
    ) -> None:
        self._server = server
        self._config = config or Config()
        root = schemas_dir if schemas_dir is not None else self._config.get("schemas.root")
        self._schemas_dir = Path(root).resolve()
        self._on_duplicate = self._config.get("schemas.on_duplicate", "error")

        self._schemas: list[SchemaDescriptor] = []
        self._paths_by_id: dict[str, str] = {}
        self._failures: list[LoadFailure] = []
        self._table: SchemaTable | None = None

    @property
    def schemas_dir(self) -> Path:
        return self._schemas_dir

    @property
    def table(self) -> SchemaTable:
        """The published schema snapshot (empty until ``load_schemas()`` completes)."""
        return self._table if self._table is not None else SchemaTable()

    @property
    def failures(self) -> tuple[LoadFailure, ...]:
        return tuple(self._failures)

    def get_schemas(self) -> tuple[SchemaDescriptor, ...]:
        return self.table.schemas

    def load_schemas(self) -> SchemaTable:
        """Scan the schemas root, register every valid document, publish the snapshot and docs.

        Raises:
            DuplicateSchemaError: If two documents resolve to the same id and
                ``schemas.on_duplicate`` is ``"error"``.
        """
        if self._table is not None:
            raise BootError(message="Schemas already loaded")
        timer = Stopwatch()
        logger.info("Loading schemas from %s", self._schemas_dir)

        for entry in self._entries():
            outcome = self.register_schema(entry.path, entry.version)
            self._schemas.extend(outcome.descriptors)
            self._failures.extend(outcome.failures)

        self._table = SchemaTable(schemas=tuple(self._schemas))
        if self._config.get("api.documentation", True):
            publish_schemas_documentation(self._server, self._table, self._config.get("api.schemas_documentation_path"))

        logger.info("Loaded %d schemas in %sms", len(self._table), timer.duration())
        return self._table

    def _entries(self) -> list[WalkEntry]:
        try:
            return list(
                walk_tree(
                    self._schemas_dir,
                    extensions=SCHEMA_EXTENSIONS,
                    version_rule=schema_version_rule,
                )
            )
        except DirectoryError as e:
            logger.warning("Schemas directory not found: %s", self._schemas_dir)
            self._failures.append(LoadFailure(source=str(self._schemas_dir), stage="directory", error=e))
            return []

    def register_schema(self, path: Path, version: Version = UNVERSIONED) -> FileOutcome:
        """Read, parse, id-normalize and register one schema file.

        Only a duplicate id under the ``"error"`` policy propagates; every
        other failure is logged and returned in the outcome.
        """
        source = str(path)
        name = path.name
        timer = Stopwatch()

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read schema file: %s (%s)", name, e)
            error = SchemaParseError(message=f"Cannot read schema file {name}: {e}", cause=e)
            return FileOutcome(source=source, failures=(LoadFailure(source, "read", error),))
        if not content.strip():
            logger.warning("Failed to read schema file: %s (empty)", name)
            error = SchemaParseError(message=f"Schema file {name} is empty")
            return FileOutcome(source=source, failures=(LoadFailure(source, "read", error),))

        try:
            document = parse_schema_document(content, path.suffix, name)
            schema_id, synthesized = resolve_schema_id(document, name, version)
        except SchemaParseError as e:
            logger.error("Failed to parse schema %s: %s", name, e.message)
            return FileOutcome(source=source, failures=(LoadFailure(source, "parse", e),))

        if synthesized:
            logger.warning("Schema %s missing $id property, using '%s'", name, schema_id)

        try:
            self._register(document, schema_id, source)
        except DuplicateSchemaError as e:
            if self._on_duplicate == "error":
                raise
            logger.error("Skipping schema %s: %s", name, e.message)
            return FileOutcome(source=source, failures=(LoadFailure(source, "register", e),))
        except RouteCoreError as e:
            logger.error("Error registering schema %s: %s", name, e.message)
            return FileOutcome(source=source, failures=(LoadFailure(source, "register", e),))

        descriptor = SchemaDescriptor(name=name, id=schema_id, path=source, version=version.token)
        if version:
            logger.info("Loaded versioned schema: %s (%s) in %sms", name, version.token, timer.duration())
        else:
            logger.info("Loaded schema: %s (%sms)", name, timer.duration())
        return FileOutcome(source=source, descriptors=(descriptor,))

    def _register(self, document: dict[str, Any], schema_id: str, source: str) -> None:
        existing = self._paths_by_id.get(schema_id)
        if existing is not None:
            raise DuplicateSchemaError(schema_id=schema_id, path=source, existing_path=existing)
        try:
            self._server.add_schema({**document, "$id": schema_id})
        except DuplicateSchemaError as e:
            raise DuplicateSchemaError(schema_id=schema_id, path=source, cause=e) from e
        self._paths_by_id[schema_id] = source
