"""Tests for version classification and URL prefixing."""

from __future__ import annotations

import pytest

from routecore.discovery.versioning import (
    UNVERSIONED,
    Version,
    extract_route_version,
    extract_schema_version,
    prefix_url,
    route_version_rule,
    schema_version_rule,
)


class TestVersionValue:
    def test_unversioned_is_falsy(self) -> None:
        assert not UNVERSIONED
        assert UNVERSIONED.token is None
        assert str(UNVERSIONED) == "default"

    def test_versioned_is_truthy(self) -> None:
        v = Version("v3")
        assert v
        assert v.is_versioned
        assert str(v) == "v3"


class TestRouteVersion:
    @pytest.mark.parametrize(
        ("relative", "expected"),
        [
            ("api/v1/users.py", "v1"),
            ("api/V2/users.py", "v2"),
            ("api/v10/deep/nested/x.py", "v10"),
            ("api/users.py", None),
            ("api/network/test.py", None),
            ("api/v1.py", None),
            ("v1/users.py", None),
            ("other/api/v1/users.py", None),
            ("API/v1/users.py", None),
            ("api/version1/users.py", None),
            ("echo.py", None),
        ],
    )
    def test_extract(self, relative: str, expected: str | None) -> None:
        assert extract_route_version(relative).token == expected

    def test_rule_keeps_inherited_version(self) -> None:
        assert route_version_rule(("api", "v1", "v2"), Version("v1")) == Version("v1")


class TestSchemaVersion:
    @pytest.mark.parametrize(
        ("relative", "expected"),
        [
            ("v1/user.json", "v1"),
            ("V2/user.json", "v2"),
            ("shared/v3/user.json", "v3"),
            ("v1/nested/v2/user.json", "v1"),
            ("user.json", None),
            ("v1.json", None),
            ("common/user.json", None),
        ],
    )
    def test_extract(self, relative: str, expected: str | None) -> None:
        assert extract_schema_version(relative).token == expected

    def test_rule_on_root_returns_inherited(self) -> None:
        assert schema_version_rule((), UNVERSIONED) == UNVERSIONED

    def test_schema_rule_is_broader_than_route_rule(self) -> None:
        assert extract_schema_version("v1/user.json") == Version("v1")
        assert extract_route_version("v1/user.py") == UNVERSIONED


class TestPrefixUrl:
    @pytest.mark.parametrize(
        ("url", "version", "expected"),
        [
            ("/users", Version("v2"), "/v2/users"),
            ("users", Version("v2"), "/v2/users"),
            ("/v2/users", Version("v2"), "/v2/users"),
            ("/v2", Version("v2"), "/v2"),
            ("/v2users", Version("v2"), "/v2/v2users"),
            ("/v1/users", Version("v2"), "/v2/v1/users"),
            ("/", Version("v1"), "/v1/"),
            ("/users", UNVERSIONED, "/users"),
            ("users", UNVERSIONED, "/users"),
        ],
    )
    def test_prefix(self, url: str, version: Version, expected: str) -> None:
        assert prefix_url(url, version) == expected

    def test_prefix_is_idempotent(self) -> None:
        once = prefix_url("/orders", Version("v3"))
        assert prefix_url(once, Version("v3")) == once
