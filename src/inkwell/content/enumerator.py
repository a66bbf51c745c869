"""Enumerator — list every post, for route and sitemap generation.

This is the only code that scans the posts directory.  Single-post
lookups go through ``ItemCache.lookup`` and never come here.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from inkwell._errors import IdentityError, NotFound
from inkwell.content.identity import PostIdentity
from inkwell.content.resolver import resolve

if TYPE_CHECKING:
    from collections.abc import Iterable

    from inkwell._types import Location
    from inkwell.config import InkwellConfig
    from inkwell.content.cache import ItemCache


def discover_identities(config: InkwellConfig) -> list[PostIdentity]:
    """Identities of every post with a source file, newest first.

    Directories whose name is not a valid identity, or that lack an index
    source, are skipped.

    """
    root = config.content_path
    if not root.is_dir():
        return []

    filename = config.index_name + config.extension
    identities: list[PostIdentity] = []
    for entry in root.iterdir():
        if not entry.is_dir() or not (entry / filename).is_file():
            continue
        try:
            identities.append(PostIdentity.from_directory(entry.name))
        except IdentityError:
            continue

    identities.sort(key=lambda i: (i.year, i.month, i.slug), reverse=True)
    return identities


def discover_locations(config: InkwellConfig) -> list[Location]:
    """Locations of every post, newest first."""
    return [
        resolve(identity, index_name=config.index_name)
        for identity in discover_identities(config)
    ]


async def list_posts(
    cache: ItemCache,
    fields: Iterable[str],
    *,
    limit: int | None = None,
) -> list[dict[str, Any]]:
    """Project *fields* of every post, newest first.

    Items come from *cache*, so posts already read by earlier lookups are
    not read again.  A post whose source disappears between discovery and
    read is skipped; any other content error propagates.

    Args:
        cache: The ItemCache to resolve items through.
        fields: Field names to project (see ``ContentItem.project``).
        limit: Maximum number of posts; None or 0 means all.

    """
    fields = tuple(fields)
    locations = discover_locations(cache.config)
    if limit:
        locations = locations[:limit]

    items = [cache.get(location) for location in locations]
    results = await asyncio.gather(
        *(item.project(fields) for item in items),
        return_exceptions=True,
    )

    posts: list[dict[str, Any]] = []
    for result in results:
        if isinstance(result, NotFound):
            continue
        if isinstance(result, BaseException):
            raise result
        posts.append(result)
    return posts


def static_paths(config: InkwellConfig) -> list[dict[str, Any]]:
    """Route params for every post: ``[{"params": {"slug": [y, m, s]}}]``.

    Needs identities only, so no source file is read.

    """
    return [
        {"params": {"slug": identity.route_params()}}
        for identity in discover_identities(config)
    ]
