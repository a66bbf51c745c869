"""Content context — the explicitly owned cache of one process.

The top-level build or dev process creates one ContentContext, calls
``init()``, threads the context through every lookup and listing, and
calls ``drop()`` on exit.  Nothing is cached at module level.

Usage::

    with ContentContext(config) as ctx:
        post = await ctx.get_post(["2021", "06", "x"], ["title", "content"])

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from inkwell.content.cache import ItemCache
from inkwell.content.enumerator import list_posts, static_paths
from inkwell.content.identity import PostIdentity
from inkwell.observability.collector import CacheCollector

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence
    from types import TracebackType

    from inkwell.config import InkwellConfig
    from inkwell.content.compiler import Compiler
    from inkwell.content.item import ContentItem

type PostKey = PostIdentity | Sequence[str] | str | Mapping[str, object]


def to_identity(key: PostKey) -> PostIdentity:
    """Coerce an identity, route segments, ``"y/m/slug"`` or a mapping."""
    if isinstance(key, PostIdentity):
        return key
    if hasattr(key, "keys"):
        return PostIdentity.from_mapping(key)  # type: ignore[arg-type]
    return PostIdentity.from_route(key)  # type: ignore[arg-type]


class ContentContext:
    """Owns the ItemCache and collector for one process lifetime.

    Args:
        config: Frozen inkwell configuration.
        compiler: Body compiler; defaults to ``MarkdownCompiler``.
        collector: Event collector; a fresh one is created if omitted.

    """

    __slots__ = ("_cache", "_collector", "_compiler", "_config")

    def __init__(
        self,
        config: InkwellConfig,
        *,
        compiler: Compiler | None = None,
        collector: CacheCollector | None = None,
    ) -> None:
        self._config = config
        self._compiler = compiler
        self._collector = collector if collector is not None else CacheCollector()
        self._cache: ItemCache | None = None

    def init(self) -> ContentContext:
        """Create the cache.  Calling it again keeps the existing cache."""
        if self._cache is None:
            self._cache = ItemCache(
                self._config,
                compiler=self._compiler,
                collector=self._collector,
            )
        return self

    def drop(self) -> None:
        """Discard the cache and every item in it."""
        if self._cache is not None:
            self._cache.drop()
            self._cache = None

    def __enter__(self) -> ContentContext:
        return self.init()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.drop()

    @property
    def is_active(self) -> bool:
        return self._cache is not None

    @property
    def config(self) -> InkwellConfig:
        return self._config

    @property
    def collector(self) -> CacheCollector:
        return self._collector

    @property
    def cache(self) -> ItemCache:
        """The live ItemCache.

        Raises:
            RuntimeError: If accessed before ``init()`` or after ``drop()``.

        """
        if self._cache is None:
            msg = "ContentContext used before init(). Call init() or use it as a context manager."
            raise RuntimeError(msg)
        return self._cache

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def item(self, key: PostKey) -> ContentItem:
        """Return the cached item for a post, resolving its location directly."""
        return self.cache.lookup(to_identity(key))

    async def get_post(self, key: PostKey, fields: Iterable[str]) -> dict[str, Any]:
        """Project *fields* of a single post."""
        return await self.item(key).project(fields)

    async def get_posts(
        self,
        fields: Iterable[str],
        *,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Project *fields* of every post, newest first."""
        return await list_posts(self.cache, fields, limit=limit)

    def static_paths(self) -> list[dict[str, Any]]:
        """Route params for every post."""
        return static_paths(self._config)
