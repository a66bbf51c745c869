"""Cache slot — compute-once-and-share storage for one derived value.

A slot is in one of four states:

- ``empty``: nothing cached; the next ``get()`` starts a computation.
- ``pending``: one computation is in flight; every caller awaits it.
- ``resolved``: a value is cached until the next ``invalidate()``.
- ``failed``: an exception is cached until the next ``invalidate()``.

The computation runs as its own ``asyncio.Task`` and callers await it
through ``asyncio.shield``, so a caller being cancelled never abandons
the shared work.  ``invalidate()`` does not cancel a pending task either.

A task that settles after its slot was invalidated still fills the slot
if the slot is ``empty`` at that moment.  If a newer computation has
already started, the stale outcome goes only to the callers that were
awaiting it.

Thread Safety:
    State transitions are guarded by a ``threading.Lock`` so that
    ``invalidate()`` may be called from a watcher thread.  ``get()`` must
    be awaited from a single event loop.

"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from types import TracebackType

type SlotState = Literal["empty", "pending", "resolved", "failed"]


class CacheSlot[T]:
    """One lazily computed, explicitly invalidated value.

    Args:
        name: Label used for the computation task (debugging aid).

    """

    __slots__ = (
        "_error",
        "_error_tb",
        "_generation",
        "_lock",
        "_name",
        "_state",
        "_task",
        "_value",
    )

    def __init__(self, name: str = "slot") -> None:
        self._name = name
        self._lock = threading.Lock()
        self._state: SlotState = "empty"
        self._task: asyncio.Task[T] | None = None
        self._value: T | None = None
        self._error: BaseException | None = None
        self._error_tb: TracebackType | None = None
        self._generation = 0

    @property
    def state(self) -> SlotState:
        """Current slot state."""
        return self._state

    @property
    def generation(self) -> int:
        """Number of invalidations so far."""
        return self._generation

    async def get(self, compute: Callable[[], Awaitable[T]]) -> T:
        """Return the cached value, computing it at most once.

        Args:
            compute: Zero-argument coroutine factory.  Called only when
                the slot is empty.

        Raises:
            Exception: Whatever *compute* raised, for every caller sharing
                the computation and for every later caller until the slot
                is invalidated.

        """
        with self._lock:
            if self._state == "resolved":
                return self._value  # type: ignore[return-value]
            if self._state == "failed":
                # Re-raise with the settled traceback so it does not grow per access.
                raise self._error.with_traceback(self._error_tb)  # type: ignore[union-attr]
            if self._state == "pending" and self._task is not None:
                task = self._task
            else:
                task = asyncio.get_running_loop().create_task(
                    _run(compute), name=f"inkwell:{self._name}",
                )
                task.add_done_callback(self._settle)
                self._task = task
                self._state = "pending"

        return await asyncio.shield(task)

    def invalidate(self) -> None:
        """Reset to ``empty``.  Idempotent; a pending task keeps running."""
        with self._lock:
            self._state = "empty"
            self._task = None
            self._value = None
            self._error = None
            self._error_tb = None
            self._generation += 1

    def _settle(self, task: asyncio.Task[T]) -> None:
        """Done callback: move the slot out of ``pending``."""
        if task.cancelled():
            with self._lock:
                if self._task is task:
                    self._state = "empty"
                    self._task = None
            return

        # Retrieving the exception here also marks it as handled for asyncio.
        error = task.exception()

        with self._lock:
            current = self._task is task
            stale_but_empty = self._task is None and self._state == "empty"
            if not (current or stale_but_empty):
                return
            self._task = None
            if error is None:
                self._state = "resolved"
                self._value = task.result()
            else:
                self._state = "failed"
                self._error = error
                self._error_tb = error.__traceback__


async def _run[T](compute: Callable[[], Awaitable[T]]) -> T:
    return await compute()
