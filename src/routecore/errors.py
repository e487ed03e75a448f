"""Error hierarchy for the routecore framework."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "RouteCoreError",
    "ConfigNotFoundError",
    "ConfigError",
    "DirectoryError",
    "BootError",
    "RouteLoadError",
    "RouteValidationError",
    "RouteConflictError",
    "AliasConfigError",
    "SchemaParseError",
    "SchemaNotFoundError",
    "DuplicateSchemaError",
    "ErrorCodes",
]


class RouteCoreError(Exception):
    """Base error for all routecore framework errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigNotFoundError(RouteCoreError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(RouteCoreError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class DirectoryError(RouteCoreError):
    """Raised when an expected discovery directory is absent or unreadable."""

    def __init__(self, path: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="DIRECTORY_ERROR",
            message=f"Directory '{path}': {reason}",
            details={"path": path, "reason": reason},
            **kwargs,
        )


class BootError(RouteCoreError):
    """Raised when the boot sequence cannot continue at all."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="BOOT_ERROR", message=message, **kwargs)


class RouteLoadError(RouteCoreError):
    """Raised when a route file cannot be imported or its definition instantiated."""

    def __init__(self, source: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="ROUTE_LOAD_ERROR",
            message=f"Failed to load route '{source}': {reason}",
            details={"source": source, "reason": reason},
            **kwargs,
        )

    @property
    def source(self) -> str:
        """The file (or definition) that failed to load."""
        return self.details["source"]


class RouteValidationError(RouteCoreError):
    """Raised when a route definition lacks required configuration."""

    def __init__(self, source: str, errors: list[str], **kwargs: Any) -> None:
        super().__init__(
            code="ROUTE_VALIDATION_ERROR",
            message=f"Invalid route configuration in '{source}': {'; '.join(errors)}",
            details={"source": source, "errors": errors},
            **kwargs,
        )

    @property
    def errors(self) -> list[str]:
        """The individual validation messages."""
        return self.details["errors"]


class RouteConflictError(RouteCoreError):
    """Raised when a method and URL pair is already registered."""

    def __init__(self, method: str, url: str, **kwargs: Any) -> None:
        super().__init__(
            code="ROUTE_CONFLICT",
            message=f"Route already registered: {method} {url}",
            details={"method": method, "url": url},
            **kwargs,
        )


class AliasConfigError(RouteCoreError):
    """Raised when a route's alias specification has an unsupported shape."""

    def __init__(self, url: str, alias: Any, **kwargs: Any) -> None:
        super().__init__(
            code="ALIAS_CONFIG_ERROR",
            message=f"Unsupported alias type for '{url}': {type(alias).__name__}",
            details={"url": url, "alias_type": type(alias).__name__},
            **kwargs,
        )


class SchemaParseError(RouteCoreError):
    """Raised when a schema file has invalid syntax or structure."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="SCHEMA_PARSE_ERROR", message=message, **kwargs)


class SchemaNotFoundError(RouteCoreError):
    """Raised when a referenced schema id is not registered."""

    def __init__(self, schema_id: str, **kwargs: Any) -> None:
        super().__init__(
            code="SCHEMA_NOT_FOUND",
            message=f"Schema not found: {schema_id}",
            details={"schema_id": schema_id},
            **kwargs,
        )


class DuplicateSchemaError(RouteCoreError):
    """Raised when two schema documents resolve to the same identifier."""

    def __init__(self, schema_id: str, path: str, existing_path: str | None = None, **kwargs: Any) -> None:
        where = f" (already registered from {existing_path})" if existing_path else ""
        super().__init__(
            code="DUPLICATE_SCHEMA_ID",
            message=f"Duplicate schema id '{schema_id}' in {path}{where}",
            details={"schema_id": schema_id, "path": path, "existing_path": existing_path},
            **kwargs,
        )

    @property
    def schema_id(self) -> str:
        """The conflicting schema identifier."""
        return self.details["schema_id"]


class ErrorCodes:
    """All framework error codes as constants.

    Example:
        if failure.error.code == ErrorCodes.ROUTE_VALIDATION_ERROR:
            report_invalid(failure.source)
    """

    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    DIRECTORY_ERROR = "DIRECTORY_ERROR"
    BOOT_ERROR = "BOOT_ERROR"
    ROUTE_LOAD_ERROR = "ROUTE_LOAD_ERROR"
    ROUTE_VALIDATION_ERROR = "ROUTE_VALIDATION_ERROR"
    ROUTE_CONFLICT = "ROUTE_CONFLICT"
    ALIAS_CONFIG_ERROR = "ALIAS_CONFIG_ERROR"
    SCHEMA_PARSE_ERROR = "SCHEMA_PARSE_ERROR"
    SCHEMA_NOT_FOUND = "SCHEMA_NOT_FOUND"
    DUPLICATE_SCHEMA_ID = "DUPLICATE_SCHEMA_ID"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
