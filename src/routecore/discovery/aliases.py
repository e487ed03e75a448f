"""Alias expansion: extra URLs dispatching to a canonical route's handler."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

from routecore.discovery.types import LoadFailure, RouteDescriptor
from routecore.discovery.versioning import Version, prefix_url
from routecore.errors import AliasConfigError, RouteCoreError
from routecore.server import RouteOptions, Server

logger = logging.getLogger(__name__)

__all__ = ["alias_urls", "expand_aliases"]


def alias_urls(alias: Any, version: Version, canonical_url: str) -> list[str]:
    """Normalize an alias specification into version-prefixed URLs.

    Raises:
        AliasConfigError: If ``alias`` is neither a string nor a list of strings.
    """
    if isinstance(alias, str):
        items = [alias]
    elif isinstance(alias, (list, tuple)) and all(isinstance(item, str) for item in alias):
        items = list(alias)
    else:
        raise AliasConfigError(url=canonical_url, alias=alias)
    return [prefix_url(item, version) for item in items]


def expand_aliases(
    server: Server,
    options: RouteOptions,
    canonical: RouteDescriptor,
    version: Version,
    source: str,
) -> tuple[list[RouteDescriptor], list[LoadFailure]]:
    """Register every alias of ``canonical`` and describe each registration.

    ``options`` are the canonical route's options; each alias shares its
    handler and hooks. A rejected alias URL is logged and skipped without
    affecting the others or the canonical route.
    """
    logger.debug("Processing aliases for %s", canonical.url)
    alias = options.config.get("alias")

    try:
        urls = alias_urls(alias, version, canonical.url)
    except AliasConfigError as e:
        logger.warning("Unknown alias type in %s: %s", source, e.message)
        return [], [LoadFailure(source=source, stage="alias", error=e)]

    alias_config = {k: v for k, v in options.config.items() if k != "alias"}
    descriptors: list[RouteDescriptor] = []
    failures: list[LoadFailure] = []
    for url in urls:
        alias_options = dataclasses.replace(options, url=url, config={**alias_config, "url": url})
        try:
            server.route(alias_options)
        except RouteCoreError as e:
            logger.error("Failed to register alias %s of %s in %s: %s", url, canonical.url, source, e.message)
            failures.append(LoadFailure(source=source, stage="alias", error=e))
            continue

        logger.info("Registering alias %s -> %s", url, canonical.url)
        descriptors.append(
            RouteDescriptor(
                source_path=canonical.source_path,
                url=url,
                method=canonical.method,
                version=canonical.version,
                is_alias=True,
                original_url=canonical.url,
                documentation=None,
            )
        )
    return descriptors, failures
