"""Tests for the error hierarchy."""

from __future__ import annotations

import pytest

from routecore.errors import (
    AliasConfigError,
    DuplicateSchemaError,
    ErrorCodes,
    RouteConflictError,
    RouteCoreError,
    RouteLoadError,
    RouteValidationError,
    SchemaNotFoundError,
)


class TestRouteCoreError:
    def test_fields_and_str(self) -> None:
        cause = ValueError("inner")
        error = RouteCoreError(code="X", message="went wrong", details={"a": 1}, cause=cause)
        assert str(error) == "[X] went wrong"
        assert error.details == {"a": 1}
        assert error.cause is cause
        assert error.timestamp

    def test_details_default_to_empty(self) -> None:
        assert RouteCoreError(code="X", message="m").details == {}


class TestSubclasses:
    def test_route_load_error(self) -> None:
        error = RouteLoadError(source="routes/a.py", reason="boom")
        assert error.code == ErrorCodes.ROUTE_LOAD_ERROR
        assert error.source == "routes/a.py"
        assert "boom" in error.message

    def test_route_validation_error(self) -> None:
        error = RouteValidationError(source="a.py", errors=["url: Field required", "method: Field required"])
        assert error.errors == ["url: Field required", "method: Field required"]
        assert "url: Field required; method" in error.message

    def test_route_conflict(self) -> None:
        error = RouteConflictError(method="GET", url="/x")
        assert error.message == "Route already registered: GET /x"

    def test_alias_config_error_names_type(self) -> None:
        error = AliasConfigError(url="/echo", alias=42)
        assert error.details["alias_type"] == "int"

    def test_duplicate_schema(self) -> None:
        error = DuplicateSchemaError(schema_id="user", path="b.json", existing_path="a.json")
        assert error.schema_id == "user"
        assert "already registered from a.json" in error.message

    def test_all_are_route_core_errors(self) -> None:
        assert isinstance(SchemaNotFoundError(schema_id="x"), RouteCoreError)


class TestErrorCodes:
    def test_immutable(self) -> None:
        with pytest.raises(AttributeError):
            ErrorCodes().ROUTE_CONFLICT = "OTHER"
