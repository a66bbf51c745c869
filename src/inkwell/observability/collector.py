"""Cache collector — records cache and derived-value events.

ContentItem and ItemCache report through a collector rather than writing
to the log directly, so a single collector can be shared by every item
of a ContentContext.

Totals reported by ``summary()`` are running counters, so they stay exact
after the bounded log has dropped old events.

Thread Safety:
    Events go to ``EventLog``, which is internally locked.  The running
    counters have their own ``threading.Lock``.

"""

from __future__ import annotations

import threading
from typing import Any

from inkwell.observability.events import (
    BundleCompiled,
    CacheLookup,
    ContentRead,
    DataParsed,
    ItemInvalidated,
    now_ns,
)
from inkwell.observability.log import EventLog


class CacheCollector:
    """Event collector for the content cache.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_counts", "_lock", "_log")

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()
        self._lock = threading.Lock()
        self._counts = dict.fromkeys(
            ("hits", "misses", "reads", "parses", "compiles", "invalidations"), 0,
        )

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    # ----- Cache events -----

    def record_lookup(self, location: str, *, hit: bool) -> None:
        """Record an ItemCache lookup."""
        self._bump("hits" if hit else "misses")
        self._log.append(CacheLookup(location=location, hit=hit, timestamp_ns=now_ns()))

    def record_invalidation(self, location: str, *, reason: str = "manual") -> None:
        """Record an item invalidation."""
        self._bump("invalidations")
        self._log.append(
            ItemInvalidated(
                location=location,
                reason=reason,  # type: ignore[arg-type]
                timestamp_ns=now_ns(),
            )
        )

    # ----- Derived values -----

    def record_read(
        self,
        location: str,
        *,
        size_bytes: int = 0,
        read_ms: float = 0.0,
        ok: bool = True,
    ) -> None:
        """Record a disk read of an item's backing file."""
        self._bump("reads")
        self._log.append(
            ContentRead(
                location=location,
                size_bytes=size_bytes,
                read_ms=read_ms,
                ok=ok,
                timestamp_ns=now_ns(),
            )
        )

    def record_parse(
        self,
        location: str,
        *,
        keys: int = 0,
        parse_ms: float = 0.0,
        ok: bool = True,
    ) -> None:
        """Record a front-matter parse."""
        self._bump("parses")
        self._log.append(
            DataParsed(
                location=location,
                keys=keys,
                parse_ms=parse_ms,
                ok=ok,
                timestamp_ns=now_ns(),
            )
        )

    def record_compile(
        self,
        location: str,
        *,
        compile_ms: float = 0.0,
        ok: bool = True,
    ) -> None:
        """Record a bundle compilation."""
        self._bump("compiles")
        self._log.append(
            BundleCompiled(
                location=location,
                compile_ms=compile_ms,
                ok=ok,
                timestamp_ns=now_ns(),
            )
        )

    # ----- Aggregates -----

    def summary(self) -> dict[str, Any]:
        """Return counters across every event recorded, retained or not."""
        with self._lock:
            return dict(self._counts)

    def _bump(self, key: str) -> None:
        with self._lock:
            self._counts[key] += 1
