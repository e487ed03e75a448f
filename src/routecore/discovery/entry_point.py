"""Entry point resolution for discovered route files."""

from __future__ import annotations

import importlib.util
import inspect
import re
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Callable

from routecore.errors import RouteLoadError
from routecore.route import RouteDefinition

__all__ = ["import_route_file", "resolve_route_factory", "module_name_for"]

FACTORY_NAME = "route"

_UNSAFE = re.compile(r"[^0-9A-Za-z_]")


def module_name_for(relative: Path) -> str:
    """Unique import name for a route file, derived from its relative path."""
    parts = [_UNSAFE.sub("_", part) for part in relative.with_suffix("").parts]
    return "routecore_routes." + ".".join(parts)


def import_route_file(file_path: Path, module_name: str | None = None) -> ModuleType:
    """Import a Python file and return the loaded module object.

    Raises:
        RouteLoadError: If the file cannot be imported.
    """
    module_name = module_name or f"routecore_routes.{_UNSAFE.sub('_', file_path.stem)}"
    spec = importlib.util.spec_from_file_location(module_name, str(file_path))
    if spec is None or spec.loader is None:
        raise RouteLoadError(source=str(file_path), reason=f"Cannot create import spec for {file_path}")

    mod = importlib.util.module_from_spec(spec)
    # dataclasses and typing resolve string annotations through sys.modules
    sys.modules[module_name] = mod
    try:
        spec.loader.exec_module(mod)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        raise RouteLoadError(source=str(file_path), reason=f"Failed to import module: {exc}", cause=exc) from exc
    return mod


def _is_definition_class(obj: Any, loaded_module_name: str) -> bool:
    return (
        inspect.isclass(obj)
        and issubclass(obj, RouteDefinition)
        and obj is not RouteDefinition
        and obj.__module__ == loaded_module_name
    )


def resolve_route_factory(loaded: ModuleType, source: str) -> Callable[..., Any]:
    """Find what to call with the server to obtain the route definition.

    A module-level ``route`` callable wins; otherwise the file must define
    exactly one ``RouteDefinition`` subclass.

    Raises:
        RouteLoadError: If no entry point or more than one candidate is found.
    """
    factory = getattr(loaded, FACTORY_NAME, None)
    if factory is not None and callable(factory):
        return factory

    candidates = [cls for _, cls in inspect.getmembers(loaded) if _is_definition_class(cls, loaded.__name__)]
    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        raise RouteLoadError(source=source, reason="No RouteDefinition subclass or 'route' factory found")
    names = ", ".join(sorted(cls.__name__ for cls in candidates))
    raise RouteLoadError(source=source, reason=f"Ambiguous entry point: multiple RouteDefinition subclasses ({names})")
