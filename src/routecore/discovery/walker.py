"""Depth-first directory traversal for route and schema discovery."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Collection, Iterator

from routecore.discovery.versioning import UNVERSIONED, Version, VersionRule
from routecore.errors import DirectoryError

logger = logging.getLogger(__name__)

__all__ = ["WalkEntry", "walk_tree"]


@dataclass(frozen=True)
class WalkEntry:
    """A discovered file, its path relative to the walk root, and its threaded version."""

    path: Path
    relative: Path
    version: Version = UNVERSIONED


def walk_tree(
    root: str | Path,
    extensions: Collection[str],
    *,
    hidden_prefixes: tuple[str, ...] = (".",),
    skip_dir_names: Collection[str] = (),
    version_rule: VersionRule | None = None,
    max_depth: int | None = None,
    follow_symlinks: bool = False,
) -> Iterator[WalkEntry]:
    """Yield every file under ``root`` whose suffix is in ``extensions``.

    Entries are visited in sorted name order, directories recursively as they
    are met. Names starting with any of ``hidden_prefixes`` are skipped
    without descending. ``version_rule`` is called with the relative parts of
    each directory and the version inherited from its parent; the result is
    attached to every file beneath it.

    Raises:
        DirectoryError: If ``root`` does not exist or is not a directory.
    """
    root = Path(root).resolve()
    if not root.is_dir():
        raise DirectoryError(path=str(root), reason="not found")

    suffixes = {ext.lower() for ext in extensions}
    visited_real_paths: set[Path] = {root}

    def _scan_dir(dir_path: Path, dir_parts: tuple[str, ...], version: Version, depth: int) -> Iterator[WalkEntry]:
        if max_depth is not None and depth > max_depth:
            logger.info("Max depth %d exceeded at %s, skipping", max_depth, dir_path)
            return

        try:
            with os.scandir(dir_path) as it:
                entries = sorted(it, key=lambda e: e.name)
        except PermissionError as e:
            logger.error("Permission denied scanning %s: %s", dir_path, e)
            return
        except OSError as e:
            logger.error("OS error scanning %s: %s", dir_path, e)
            return

        for entry in entries:
            name = entry.name
            if name.startswith(hidden_prefixes):
                logger.debug("Skipping hidden entry: %s", entry.path)
                continue

            try:
                is_dir = entry.is_dir(follow_symlinks=follow_symlinks)
                is_file = entry.is_file(follow_symlinks=follow_symlinks)
                is_symlink = entry.is_symlink()
            except OSError as e:
                logger.error("OS error accessing %s: %s", entry.path, e)
                continue

            entry_path = Path(entry.path)

            if is_dir:
                if name in skip_dir_names:
                    continue
                if is_symlink:
                    real = entry_path.resolve()
                    if real in visited_real_paths:
                        logger.warning("Symlink cycle detected at %s -> %s, skipping", entry_path, real)
                        continue
                    visited_real_paths.add(real)
                child_parts = dir_parts + (name,)
                child_version = version_rule(child_parts, version) if version_rule is not None else version
                yield from _scan_dir(entry_path, child_parts, child_version, depth + 1)
            elif is_file and entry_path.suffix.lower() in suffixes:
                yield WalkEntry(path=entry_path, relative=Path(*dir_parts, name), version=version)

    return _scan_dir(root, (), UNVERSIONED, depth=1)
