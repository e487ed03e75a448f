"""Discovery types: descriptors, snapshots, and boot outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from routecore.errors import RouteCoreError

__all__ = [
    "RouteDescriptor",
    "SchemaDescriptor",
    "RouteTable",
    "SchemaTable",
    "LoadFailure",
    "FileOutcome",
    "BootReport",
]


@dataclass(frozen=True)
class RouteDescriptor:
    """One registered URL and its method set."""

    source_path: str | None
    url: str
    method: str | tuple[str, ...]
    version: str | None = None
    is_alias: bool = False
    original_url: str | None = None
    documentation: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.is_alias:
            if not self.original_url:
                raise ValueError(f"Alias route '{self.url}' must carry original_url")
            if self.documentation is not None:
                raise ValueError(f"Alias route '{self.url}' cannot carry documentation")
        elif self.original_url is not None:
            raise ValueError(f"Canonical route '{self.url}' cannot carry original_url")

    def to_dict(self) -> dict[str, Any]:
        """Documentation view of this descriptor."""
        return {
            "url": self.url,
            "method": list(self.method) if isinstance(self.method, tuple) else self.method,
            "version": self.version or "default",
            "isAlias": self.is_alias,
            "originalUrl": self.original_url,
            "documentation": self.documentation or {},
        }


@dataclass(frozen=True)
class SchemaDescriptor:
    """One registered schema document."""

    name: str
    id: str
    path: str
    version: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "id": self.id, "version": self.version or "default"}


@dataclass(frozen=True)
class RouteTable:
    """Immutable snapshot of the routes registered during boot."""

    routes: tuple[RouteDescriptor, ...] = ()
    versions: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.routes)

    def __iter__(self):
        return iter(self.routes)

    def canonical(self) -> tuple[RouteDescriptor, ...]:
        return tuple(r for r in self.routes if not r.is_alias)

    def aliases_of(self, url: str) -> tuple[RouteDescriptor, ...]:
        return tuple(r for r in self.routes if r.is_alias and r.original_url == url)

    def for_version(self, version: str) -> tuple[RouteDescriptor, ...]:
        """Canonical routes of ``version`` in discovery order."""
        return tuple(r for r in self.routes if r.version == version and not r.is_alias)


@dataclass(frozen=True)
class SchemaTable:
    """Immutable snapshot of the schemas registered during boot."""

    schemas: tuple[SchemaDescriptor, ...] = ()

    def __len__(self) -> int:
        return len(self.schemas)

    def __iter__(self):
        return iter(self.schemas)

    def ids(self) -> tuple[str, ...]:
        return tuple(s.id for s in self.schemas)


@dataclass(frozen=True)
class LoadFailure:
    """A per-file failure recovered during discovery."""

    source: str
    stage: str
    error: RouteCoreError

    @property
    def message(self) -> str:
        return self.error.message


@dataclass(frozen=True)
class FileOutcome:
    """Result of processing one discovered file.

    A file may register descriptors and still report failures, e.g. a
    canonical route whose alias specification was rejected.
    """

    source: str
    descriptors: tuple[Any, ...] = ()
    failures: tuple[LoadFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass(frozen=True)
class BootReport:
    """Aggregated outcome of one discovery pass."""

    routes: RouteTable = field(default_factory=RouteTable)
    schemas: SchemaTable = field(default_factory=SchemaTable)
    failures: tuple[LoadFailure, ...] = ()
    duration_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return not self.failures

    def summary(self) -> str:
        return (
            f"{len(self.routes)} routes, {len(self.schemas)} schemas, "
            f"{len(self.failures)} failures in {self.duration_ms:.1f}ms"
        )
