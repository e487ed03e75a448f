"""Shared pytest fixtures for the routecore test suite."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from routecore.config import Config
from routecore.server import Server


# ---------------------------------------------------------------------------
# Route file templates
# ---------------------------------------------------------------------------

_ROUTE_TEMPLATE = """\
from routecore import RouteDefinition


class {class_name}(RouteDefinition):
    def __init__(self, server):
        super().__init__(server, {config!r})

    def handler(self, request, reply):
        reply.send({{"result": {{"route": {name!r}, "path": request.url.path}}}})
"""


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def server() -> Server:
    """A Server without access logging."""
    return Server(access_log=False)


@pytest.fixture
def routes_dir(tmp_path: Path) -> Path:
    path = tmp_path / "routes"
    path.mkdir()
    return path


@pytest.fixture
def schemas_dir(tmp_path: Path) -> Path:
    path = tmp_path / "schemas"
    path.mkdir()
    return path


@pytest.fixture
def make_config(routes_dir: Path, schemas_dir: Path) -> Callable[..., Config]:
    """Build a Config pointed at the temp routes/schemas roots, with overrides."""

    def _make(**sections: dict[str, Any]) -> Config:
        data: dict[str, Any] = {
            "routes": {"root": str(routes_dir)},
            "schemas": {"root": str(schemas_dir)},
            "logging": {"access_log": False},
        }
        for section, values in sections.items():
            data.setdefault(section, {}).update(values)
        return Config(data)

    return _make


@pytest.fixture
def write_route() -> Callable[..., Path]:
    """Write a route file whose handler echoes its name and the request path."""

    def _write(root: Path, relative: str, class_name: str = "SampleRoute", **config: Any) -> Path:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(_ROUTE_TEMPLATE.format(class_name=class_name, config=config, name=relative))
        return path

    return _write


@pytest.fixture
def write_schema() -> Callable[..., Path]:
    """Write a JSON schema document."""

    def _write(root: Path, relative: str, document: dict[str, Any]) -> Path:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document))
        return path

    return _write
