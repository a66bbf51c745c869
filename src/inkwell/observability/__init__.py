"""Content cache observability — structured events for every cache action.

Records:
- **Lookups**: ItemCache hits and misses
- **Derived values**: file reads, front-matter parses, bundle compiles
- **Invalidations**: watcher-driven or manual slot resets

All events are frozen dataclasses with nanosecond timestamps, safe for
concurrent production from multiple threads.

Quick Start:
    >>> from inkwell.observability import CacheCollector, EventLog
    >>> log = EventLog()
    >>> collector = CacheCollector(log)
    >>> collector.record_lookup("2021-06-x/index", hit=False)
    >>> collector.summary()["misses"]
    1

"""

from inkwell.observability.collector import CacheCollector
from inkwell.observability.events import (
    BundleCompiled,
    CacheEvent,
    CacheLookup,
    ContentRead,
    DataParsed,
    ItemInvalidated,
    now_ns,
)
from inkwell.observability.log import EventLog

__all__ = [
    "BundleCompiled",
    "CacheCollector",
    "CacheEvent",
    "CacheLookup",
    "ContentRead",
    "DataParsed",
    "EventLog",
    "ItemInvalidated",
    "now_ns",
]
