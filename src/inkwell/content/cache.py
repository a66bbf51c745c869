"""Item cache — one ContentItem per location for the life of a process.

Entries are created on first lookup and never evicted.  Invalidation
clears an item's cached values in place; the instance stays resident so
every holder of a reference sees the refreshed values.

The cache is not shared between processes.  A build that fans out over
several worker processes gives each one its own empty cache.

Thread Safety:
    ``get()`` is a check-then-insert under a ``threading.Lock``, so two
    concurrent lookups for the same location never construct two items.

"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from inkwell._errors import IdentityError
from inkwell.content.compiler import MarkdownCompiler
from inkwell.content.item import ContentItem
from inkwell.content.resolver import identity_for_location, resolve

if TYPE_CHECKING:
    from collections.abc import Iterator

    from inkwell._types import Location
    from inkwell.config import InkwellConfig
    from inkwell.content.compiler import Compiler
    from inkwell.content.identity import PostIdentity
    from inkwell.observability.collector import CacheCollector


class ItemCache:
    """Process-lifetime mapping from location to ContentItem.

    Args:
        config: Frozen inkwell configuration.
        compiler: Body compiler handed to every item.  Defaults to
            ``MarkdownCompiler``.
        collector: Optional event collector shared by every item.

    """

    __slots__ = ("_collector", "_compiler", "_config", "_items", "_lock")

    def __init__(
        self,
        config: InkwellConfig,
        *,
        compiler: Compiler | None = None,
        collector: CacheCollector | None = None,
    ) -> None:
        self._config = config
        self._compiler = compiler if compiler is not None else MarkdownCompiler()
        self._collector = collector
        self._items: dict[Location, ContentItem] = {}
        self._lock = threading.Lock()

    @property
    def config(self) -> InkwellConfig:
        return self._config

    def get(self, location: Location) -> ContentItem:
        """Return the resident item for *location*, constructing it once.

        Raises:
            IdentityError: If *location* is not canonical.

        """
        canonical = resolve(identity_for_location(location), index_name=self._config.index_name)
        if location != canonical:
            msg = f"Not a canonical location: {location!r} (expected {canonical!r})"
            raise IdentityError(msg)

        with self._lock:
            item = self._items.get(location)
            hit = item is not None
            if item is None:
                item = ContentItem(
                    location,
                    config=self._config,
                    compiler=self._compiler,
                    collector=self._collector,
                )
                self._items[location] = item

        if self._collector is not None:
            self._collector.record_lookup(location, hit=hit)
        return item

    def lookup(self, identity: PostIdentity) -> ContentItem:
        """Resolve *identity* and return its item.  O(1), no directory scan."""
        return self.get(resolve(identity, index_name=self._config.index_name))

    def peek(self, location: Location) -> ContentItem | None:
        """Return the resident item without constructing one."""
        with self._lock:
            return self._items.get(location)

    def invalidate(self, location: Location, *, reason: str = "manual") -> bool:
        """Clear the cached values of a resident item.

        Returns True if an item was resident.  Nothing is removed.

        """
        item = self.peek(location)
        if item is None:
            return False
        item.invalidate(reason=reason)
        return True

    def invalidate_all(self, *, reason: str = "manual") -> int:
        """Clear every resident item.  Returns the number of items cleared."""
        with self._lock:
            items = list(self._items.values())
        for item in items:
            item.invalidate(reason=reason)
        return len(items)

    def drop(self) -> int:
        """Forget every item.  Returns how many were resident."""
        with self._lock:
            count = len(self._items)
            self._items.clear()
            return count

    def locations(self) -> list[Location]:
        """Resident locations, in insertion order."""
        with self._lock:
            return list(self._items)

    def __contains__(self, location: object) -> bool:
        with self._lock:
            return location in self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[ContentItem]:
        with self._lock:
            items = list(self._items.values())
        return iter(items)
