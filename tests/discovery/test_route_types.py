"""Tests for discovery descriptor and snapshot types."""

from __future__ import annotations

import dataclasses

import pytest

from routecore.discovery.types import (
    BootReport,
    FileOutcome,
    LoadFailure,
    RouteDescriptor,
    RouteTable,
    SchemaDescriptor,
    SchemaTable,
)
from routecore.errors import RouteLoadError


class TestRouteDescriptor:
    def test_alias_requires_original_url(self) -> None:
        with pytest.raises(ValueError, match="original_url"):
            RouteDescriptor("x.py", "/alias", "GET", is_alias=True)

    def test_alias_cannot_carry_documentation(self) -> None:
        with pytest.raises(ValueError, match="documentation"):
            RouteDescriptor("x.py", "/alias", "GET", is_alias=True, original_url="/x", documentation={"a": 1})

    def test_canonical_cannot_carry_original_url(self) -> None:
        with pytest.raises(ValueError):
            RouteDescriptor("x.py", "/x", "GET", original_url="/y")

    def test_frozen(self) -> None:
        descriptor = RouteDescriptor("x.py", "/x", "GET")
        with pytest.raises(dataclasses.FrozenInstanceError):
            descriptor.url = "/y"

    def test_to_dict_unversioned(self) -> None:
        assert RouteDescriptor("x.py", "/x", "GET").to_dict() == {
            "url": "/x",
            "method": "GET",
            "version": "default",
            "isAlias": False,
            "originalUrl": None,
            "documentation": {},
        }


class TestTables:
    def test_route_table_views(self) -> None:
        table = RouteTable(
            routes=(
                RouteDescriptor("a.py", "/v1/a", "GET", "v1"),
                RouteDescriptor("a.py", "/v1/b", "GET", "v1", is_alias=True, original_url="/v1/a"),
                RouteDescriptor("c.py", "/c", "GET"),
            ),
            versions=("v1",),
        )
        assert len(table) == 3
        assert [r.url for r in table.canonical()] == ["/v1/a", "/c"]
        assert [r.url for r in table.aliases_of("/v1/a")] == ["/v1/b"]
        assert [r.url for r in table.for_version("v1")] == ["/v1/a"]

    def test_schema_table_ids(self) -> None:
        table = SchemaTable(schemas=(SchemaDescriptor("u.json", "v1-user", "/s/v1/u.json", "v1"),))
        assert table.ids() == ("v1-user",)
        assert list(table)[0].to_dict() == {"name": "u.json", "id": "v1-user", "version": "v1"}


class TestOutcomes:
    def test_file_outcome_ok(self) -> None:
        assert FileOutcome(source="a.py").ok
        failure = LoadFailure("a.py", "load", RouteLoadError(source="a.py", reason="boom"))
        outcome = FileOutcome(source="a.py", failures=(failure,))
        assert not outcome.ok
        assert "boom" in failure.message

    def test_boot_report_summary(self) -> None:
        report = BootReport(
            routes=RouteTable(routes=(RouteDescriptor("c.py", "/c", "GET"),)),
            duration_ms=12.345,
        )
        assert report.ok
        assert report.summary() == "1 routes, 0 schemas, 0 failures in 12.3ms"
