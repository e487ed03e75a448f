"""Configuration loading and dot-path access."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml

from routecore.errors import ConfigError, ConfigNotFoundError

__all__ = ["Config", "DEFAULTS"]

DEFAULTS: dict[str, Any] = {
    "server": {"host": "0.0.0.0", "port": 8000},
    "logging": {"level": "info", "format": "text", "access_log": True},
    "routes": {"root": "./routes", "max_depth": 16, "follow_symlinks": False},
    "schemas": {"root": "./schemas", "on_duplicate": "error"},
    "api": {
        "documentation": True,
        "routes_documentation_path": "/api/routes",
        "schemas_documentation_path": "/api/schemas",
        "version_index": True,
    },
}

_DUPLICATE_POLICIES = {"error", "skip"}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class Config:
    """Configuration accessor with dot-path key support.

    ``Config()`` yields the built-in defaults; ``Config(data)`` merges
    ``data`` over them.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = _deep_merge(DEFAULTS, data or {})
        self._validate()

    @classmethod
    def load(cls, path: str | Path) -> Config:
        """Load a YAML configuration file and merge it over the defaults.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigError: If the file is not valid YAML or not a mapping.
        """
        path = Path(path)
        if not path.exists():
            raise ConfigNotFoundError(config_path=str(path))

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(message=f"Invalid YAML in config file: {path}", cause=e) from e

        if parsed is None:
            parsed = {}
        if not isinstance(parsed, dict):
            raise ConfigError(message=f"Config file must be a YAML mapping: {path}")
        return cls(parsed)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-path key."""
        parts = key.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    def with_overrides(self, overrides: dict[str, Any]) -> Config:
        """Return a new Config with dot-path overrides applied. ``None`` values are ignored."""
        data = copy.deepcopy(self._data)
        for key, value in overrides.items():
            if value is None:
                continue
            current = data
            *parents, leaf = key.split(".")
            for part in parents:
                current = current.setdefault(part, {})
            current[leaf] = value
        return Config(data)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)

    def _validate(self) -> None:
        policy = self.get("schemas.on_duplicate")
        if policy not in _DUPLICATE_POLICIES:
            raise ConfigError(
                message=f"schemas.on_duplicate must be one of {sorted(_DUPLICATE_POLICIES)}, got {policy!r}"
            )
        port = self.get("server.port")
        try:
            int(port)
        except (TypeError, ValueError) as e:
            raise ConfigError(message=f"server.port must be an integer, got {port!r}") from e
        if self.get("logging.format") not in ("text", "json"):
            raise ConfigError(message="logging.format must be 'text' or 'json'")
