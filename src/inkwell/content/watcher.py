"""File watcher — turns content changes into item invalidations.

Monitors the posts directory with watchfiles.  Each change to a post
source becomes a ``ChangeEvent`` keyed by location; the consumer clears
the matching ItemCache entry in place.

Only used in dev mode.  A one-shot build has no watcher: its cache is
discarded when the process exits.

Events are produced by ``watchfiles.awatch`` inside the event loop that
serves lookups, so invalidations never race a slot transition from
another thread.
"""

from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from watchfiles import Change, awatch

from inkwell.content.resolver import location_for_path

if TYPE_CHECKING:
    from collections.abc import AsyncIterable, AsyncIterator, Iterable

    from inkwell._types import ChangeKind, Location
    from inkwell.config import InkwellConfig
    from inkwell.content.cache import ItemCache


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A change to a post source.

    Attributes:
        location: Location of the changed post.
        kind: Type of filesystem change.
        path: Absolute path to the changed file.

    """

    location: Location
    kind: ChangeKind
    path: Path


# Mapping from watchfiles Change enum to our kind literals.
_CHANGE_KIND_MAP: dict[Change, ChangeKind] = {
    Change.added: "created",
    Change.modified: "modified",
    Change.deleted: "removed",
}


def to_change_events(
    raw_changes: Iterable[tuple[Change, str]],
    config: InkwellConfig,
) -> list[ChangeEvent]:
    """Convert a watchfiles change batch into ChangeEvents.

    Non-post files are dropped.  The result is ordered by path so a batch
    is processed deterministically.

    """
    events: list[ChangeEvent] = []
    for change_type, path_str in sorted(raw_changes, key=lambda c: c[1]):
        path = Path(path_str)
        location = location_for_path(config, path)
        if location is None:
            continue
        kind = _CHANGE_KIND_MAP.get(change_type, "modified")
        events.append(ChangeEvent(location=location, kind=kind, path=path))
    return events


class ContentWatcher:
    """Watches the posts directory and yields ChangeEvents.

    The event stream is not restartable: once ``stop()`` is called,
    ``changes()`` ends and later calls return immediately.

    Args:
        config: Frozen inkwell configuration.

    """

    def __init__(self, config: InkwellConfig) -> None:
        self._config = config
        self._stop_event = asyncio.Event()

    @property
    def is_stopped(self) -> bool:
        return self._stop_event.is_set()

    def stop(self) -> None:
        """Signal the event stream to finish."""
        self._stop_event.set()

    async def changes(self) -> AsyncIterator[ChangeEvent]:
        """Async iterator of ChangeEvents until ``stop()`` is called."""
        if self.is_stopped:
            return

        async for raw_changes in awatch(
            self._config.content_path,
            stop_event=self._stop_event,
            debounce=self._config.debounce_ms,
            step=100,
        ):
            for event in to_change_events(raw_changes, self._config):
                yield event


async def apply_invalidations(
    events: AsyncIterable[ChangeEvent],
    cache: ItemCache,
    *,
    verbose: bool = False,
) -> int:
    """Invalidate the resident item for each event.

    Events for locations that were never looked up are ignored: there is
    nothing cached for them yet.

    Returns:
        The number of resident items invalidated.

    """
    count = 0
    async for event in events:
        if cache.invalidate(event.location, reason=event.kind):
            count += 1
            if verbose:
                print(f"  Invalidated {event.location} ({event.kind})", file=sys.stderr)
    return count
