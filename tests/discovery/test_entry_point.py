"""Tests for route file import and entry point resolution."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from routecore.discovery.entry_point import import_route_file, module_name_for, resolve_route_factory
from routecore.discovery.routes import RouteLoader
from routecore.errors import RouteLoadError
from routecore.route import RouteDefinition


def _load(tmp_path: Path, name: str, source: str):
    path = tmp_path / name
    path.write_text(source)
    return import_route_file(path, module_name_for(Path(name)))


class TestModuleName:
    def test_nested_path(self) -> None:
        assert module_name_for(Path("api/v1/users.py")) == "routecore_routes.api.v1.users"

    def test_unsafe_characters_replaced(self) -> None:
        assert module_name_for(Path("my-routes/get user.py")) == "routecore_routes.my_routes.get_user"


class TestImportRouteFile:
    def test_import_error_wrapped(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.py"
        path.write_text("raise ValueError('nope')\n")
        with pytest.raises(RouteLoadError) as exc_info:
            import_route_file(path)
        assert isinstance(exc_info.value.cause, ValueError)
        assert exc_info.value.source == str(path)


class TestResolveRouteFactory:
    def test_single_subclass(self, tmp_path: Path) -> None:
        mod = _load(
            tmp_path,
            "one.py",
            "from routecore import RouteDefinition\nclass One(RouteDefinition):\n    pass\n",
        )
        factory = resolve_route_factory(mod, "one.py")
        assert issubclass(factory, RouteDefinition)
        assert factory.__name__ == "One"

    def test_base_class_not_counted(self, tmp_path: Path) -> None:
        mod = _load(
            tmp_path,
            "child.py",
            "from routecore import RouteDefinition\n"
            "from routecore.route import RouteDefinition as Base\n"
            "class Child(Base):\n    pass\n",
        )
        assert resolve_route_factory(mod, "child.py").__name__ == "Child"

    def test_factory_function_wins(self, tmp_path: Path) -> None:
        mod = _load(
            tmp_path,
            "both.py",
            "from routecore import RouteDefinition\n"
            "class A(RouteDefinition):\n    pass\n"
            "class B(RouteDefinition):\n    pass\n"
            "def route(server):\n    return A(server)\n",
        )
        assert resolve_route_factory(mod, "both.py").__name__ == "route"

    def test_ambiguous(self, tmp_path: Path) -> None:
        mod = _load(
            tmp_path,
            "two.py",
            "from routecore import RouteDefinition\n"
            "class A(RouteDefinition):\n    pass\n"
            "class B(RouteDefinition):\n    pass\n",
        )
        with pytest.raises(RouteLoadError, match="Ambiguous entry point"):
            resolve_route_factory(mod, "two.py")

    def test_none_found(self, tmp_path: Path) -> None:
        mod = _load(tmp_path, "empty.py", "route = 'not callable'\n")
        with pytest.raises(RouteLoadError, match="No RouteDefinition"):
            resolve_route_factory(mod, "empty.py")


class TestPostponedAnnotations:
    _SOURCE = (
        "from __future__ import annotations\n"
        "from dataclasses import dataclass\n"
        "from routecore import RouteDefinition\n"
        "@dataclass\n"
        "class Page:\n"
        "    limit: int = 10\n"
        "    offset: int = 0\n"
        "class Listing(RouteDefinition):\n"
        "    def __init__(self, server):\n"
        "        super().__init__(server, {'method': 'GET', 'url': '/listing'})\n"
        "    def handler(self, request, reply):\n"
        "        reply.send({'result': Page().limit})\n"
    )

    def test_dataclass_with_string_annotations_imports(self, tmp_path: Path) -> None:
        mod = _load(tmp_path, "listing.py", self._SOURCE)
        assert mod.Page().limit == 10
        assert resolve_route_factory(mod, "listing.py").__name__ == "Listing"

    def test_route_with_dataclass_registers(self, server, make_config, routes_dir) -> None:
        (routes_dir / "listing.py").write_text(self._SOURCE)
        loader = RouteLoader(server, make_config())
        table = loader.load_routes()
        assert [r.url for r in table] == ["/listing"]
        assert loader.failures == ()

    def test_failed_import_not_left_in_sys_modules(self, tmp_path: Path) -> None:
        path = tmp_path / "broken_import.py"
        path.write_text("raise ImportError('missing')\n")
        with pytest.raises(RouteLoadError):
            import_route_file(path, "routecore_routes.broken_import")
        assert "routecore_routes.broken_import" not in sys.modules
