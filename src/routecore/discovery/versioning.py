"""Version classification from directory structure.

Routes are versioned only under ``api/v<digits>/``; schemas are versioned
under any ``v<digits>`` directory, and the outermost match wins for the whole
subtree.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePath
from typing import Callable, Sequence

__all__ = [
    "Version",
    "UNVERSIONED",
    "VersionRule",
    "route_version_rule",
    "schema_version_rule",
    "extract_route_version",
    "extract_schema_version",
    "prefix_url",
]

_VERSION_SEGMENT = re.compile(r"^v\d+$", re.IGNORECASE)


@dataclass(frozen=True)
class Version:
    """Either ``Version("v2")`` or ``UNVERSIONED`` (token is None)."""

    token: str | None = None

    @property
    def is_versioned(self) -> bool:
        return self.token is not None

    def __bool__(self) -> bool:
        return self.is_versioned

    def __str__(self) -> str:
        return self.token or "default"


UNVERSIONED = Version()

VersionRule = Callable[[Sequence[str], Version], Version]


def _classify_segment(segment: str) -> Version:
    if _VERSION_SEGMENT.match(segment):
        return Version(segment.lower())
    return UNVERSIONED


def route_version_rule(dir_parts: Sequence[str], inherited: Version) -> Version:
    """Classify a routes subdirectory given its path relative to the routes root."""
    if inherited:
        return inherited
    if len(dir_parts) == 2 and dir_parts[0] == "api":
        return _classify_segment(dir_parts[1])
    return UNVERSIONED


def schema_version_rule(dir_parts: Sequence[str], inherited: Version) -> Version:
    """Classify a schemas subdirectory; an inherited version is never replaced."""
    if inherited or not dir_parts:
        return inherited
    return _classify_segment(dir_parts[-1])


def _extract(relative_path: str | PurePath, rule: VersionRule) -> Version:
    dir_parts = PurePath(relative_path).parts[:-1]
    version = UNVERSIONED
    for depth in range(1, len(dir_parts) + 1):
        version = rule(dir_parts[:depth], version)
    return version


def extract_route_version(relative_path: str | PurePath) -> Version:
    """Version of a route file given its path relative to the routes root."""
    return _extract(relative_path, route_version_rule)


def extract_schema_version(relative_path: str | PurePath) -> Version:
    """Version of a schema file given its path relative to the schemas root."""
    return _extract(relative_path, schema_version_rule)


def prefix_url(url: str, version: Version) -> str:
    """Prefix ``url`` with ``/<version>`` unless unversioned or already prefixed."""
    if not url.startswith("/"):
        url = "/" + url
    if not version:
        return url
    prefix = f"/{version.token}"
    if url == prefix or url.startswith(prefix + "/"):
        return url
    return prefix + url
