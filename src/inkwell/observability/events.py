"""Event model for content cache observability.

Every derived-value computation and every cache lookup or invalidation
is recorded as a frozen dataclass with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- ``location``: The item the event concerns

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass
from typing import Literal


# ---------------------------------------------------------------------------
# Cache events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CacheLookup:
    """An item was requested from the ItemCache.

    Attributes:
        location: Requested location.
        hit: True if the item was already resident.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    location: str
    hit: bool
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ItemInvalidated:
    """A resident item had its cached values cleared.

    Attributes:
        location: Invalidated location.
        reason: What triggered the invalidation.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    location: str
    reason: Literal["created", "modified", "removed", "manual"]
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Derived-value events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ContentRead:
    """The backing file of an item was read from disk.

    Attributes:
        location: Item location.
        size_bytes: Characters read (0 on failure).
        read_ms: Time spent reading in milliseconds.
        ok: False if the read failed.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    location: str
    size_bytes: int
    read_ms: float
    ok: bool
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class DataParsed:
    """The front-matter header of an item was parsed.

    Attributes:
        location: Item location.
        keys: Number of metadata keys produced (0 on failure).
        parse_ms: Time spent parsing in milliseconds.
        ok: False if parsing failed.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    location: str
    keys: int
    parse_ms: float
    ok: bool
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class BundleCompiled:
    """The body of an item was compiled into a bundle.

    Attributes:
        location: Item location.
        compile_ms: Time spent compiling in milliseconds.
        ok: False if compilation failed.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    location: str
    compile_ms: float
    ok: bool
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

type CacheEvent = (
    CacheLookup
    | ItemInvalidated
    | ContentRead
    | DataParsed
    | BundleCompiled
)


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
