"""Content item — one post source with three lazily cached derived values.

A ContentItem owns exactly one location and never scans the content
directory.  Its derived values are each held in an independent
CacheSlot:

- ``content()``: raw source text, read from disk
- ``data()``: front-matter merged with identity properties
- ``bundle()``: compiled body

Each value is computed on first access and kept (success or failure)
until ``invalidate()``.  A broken file therefore fails consistently
instead of being re-read on every access.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from inkwell._errors import CompileError, NotFound, ReadError
from inkwell.content.compiler import Bundle, run_compiler
from inkwell.content.frontmatter import parse_frontmatter, split_frontmatter
from inkwell.content.resolver import identity_for_location, location_path
from inkwell.content.slot import CacheSlot

if TYPE_CHECKING:
    from pathlib import Path

    from inkwell._types import Location, PostData, Properties
    from inkwell.config import InkwellConfig
    from inkwell.content.compiler import Compiler
    from inkwell.content.identity import PostIdentity
    from inkwell.observability.collector import CacheCollector


class ContentItem:
    """Lazily resolved post.

    Construction is cheap and does no I/O.  ItemCache is the only place
    items should be constructed, so that each location has one instance.

    Args:
        location: Canonical location of the post.
        config: Frozen inkwell configuration.
        compiler: Body compiler collaborator.
        collector: Optional event collector.

    Raises:
        IdentityError: If *location* is not canonical.

    """

    __slots__ = (
        "_bundle_slot",
        "_collector",
        "_compiler",
        "_content_slot",
        "_data_slot",
        "_identity",
        "_location",
        "_path",
        "_required",
    )

    def __init__(
        self,
        location: Location,
        *,
        config: InkwellConfig,
        compiler: Compiler,
        collector: CacheCollector | None = None,
    ) -> None:
        self._location = location
        self._identity = identity_for_location(location)
        self._path = location_path(config, location)
        self._required = config.required_fields
        self._compiler = compiler
        self._collector = collector
        self._content_slot: CacheSlot[str] = CacheSlot(f"content:{location}")
        self._data_slot: CacheSlot[PostData] = CacheSlot(f"data:{location}")
        self._bundle_slot: CacheSlot[Bundle] = CacheSlot(f"bundle:{location}")

    def __repr__(self) -> str:
        return f"ContentItem({self._location!r})"

    @property
    def location(self) -> Location:
        return self._location

    @property
    def identity(self) -> PostIdentity:
        return self._identity

    @property
    def path(self) -> Path:
        """Absolute path of the backing source file (may not exist)."""
        return self._path

    @property
    def properties(self) -> Properties:
        """Identity-derived data.  Never fails and never touches disk."""
        return self._identity.properties()

    @property
    def generation(self) -> int:
        """Number of times this item has been invalidated."""
        return self._content_slot.generation

    @property
    def slot_states(self) -> dict[str, str]:
        """Current state of each slot, for diagnostics."""
        return {
            "content": self._content_slot.state,
            "data": self._data_slot.state,
            "bundle": self._bundle_slot.state,
        }

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    async def content(self) -> str:
        """Raw source text.

        Raises:
            NotFound: The source file does not exist.
            ReadError: Any other I/O or decoding failure.

        """
        return await self._content_slot.get(self._read)

    async def data(self) -> PostData:
        """Front-matter merged with ``properties``.

        Identity properties win over front-matter keys of the same name.
        The returned mapping is shared by all callers; treat it as read-only.

        Raises:
            NotFound, ReadError: Propagated from ``content()``.
            ParseError: The header is malformed or lacks required fields.

        """
        return await self._data_slot.get(self._parse)

    async def bundle(self) -> Bundle:
        """Compiled body.

        Raises:
            NotFound, ReadError: Propagated from ``content()``.
            CompileError: The compiler rejected the body.

        """
        return await self._bundle_slot.get(self._compile)

    async def project(self, fields: Iterable[str]) -> dict[str, Any]:
        """Return only the requested fields.

        ``"content"`` maps to the raw source.  Other names are looked up in
        ``data()``, which is only parsed if a field is not an identity
        property.  Unknown fields are omitted.

        """
        fields = tuple(fields)
        props = self.properties
        needs_data = any(f != "content" and f not in props for f in fields)
        source: dict[str, Any] = await self.data() if needs_data else props

        result: dict[str, Any] = {}
        for name in fields:
            if name == "content":
                result[name] = await self.content()
            elif name in source:
                result[name] = source[name]
        return result

    def invalidate(self, *, reason: str = "manual") -> None:
        """Clear all three slots.  Idempotent; in-flight work is not cancelled."""
        self._content_slot.invalidate()
        self._data_slot.invalidate()
        self._bundle_slot.invalidate()
        if self._collector is not None:
            self._collector.record_invalidation(self._location, reason=reason)

    # ------------------------------------------------------------------
    # Computations (run at most once per slot generation)
    # ------------------------------------------------------------------

    async def _read(self) -> str:
        t0 = time.perf_counter()
        try:
            text = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
        except (FileNotFoundError, NotADirectoryError) as exc:
            self._record_read(t0, 0, ok=False)
            msg = f"No post at {self._location!r} ({self._path})"
            raise NotFound(msg, location=self._location) from exc
        except (OSError, UnicodeDecodeError) as exc:
            self._record_read(t0, 0, ok=False)
            msg = f"Failed to read {self._path}: {exc}"
            raise ReadError(msg, location=self._location) from exc

        self._record_read(t0, len(text), ok=True)
        return text

    async def _parse(self) -> PostData:
        raw = await self.content()
        t0 = time.perf_counter()
        try:
            metadata = parse_frontmatter(raw, location=self._location, required=self._required)
        except Exception:
            self._record_parse(t0, 0, ok=False)
            raise
        merged = {**metadata, **self.properties}
        self._record_parse(t0, len(merged), ok=True)
        return merged

    async def _compile(self) -> Bundle:
        raw = await self.content()
        _header, body = split_frontmatter(raw, strict=False)
        t0 = time.perf_counter()
        try:
            html = await run_compiler(self._compiler, body)
        except Exception as exc:
            self._record_compile(t0, ok=False)
            msg = f"Failed to compile {self._location!r}: {exc}"
            raise CompileError(msg, location=self._location, diagnostic=str(exc)) from exc
        elapsed = (time.perf_counter() - t0) * 1000
        self._record_compile(t0, ok=True)
        return Bundle(location=self._location, html=html, compile_ms=elapsed)

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    def _record_read(self, t0: float, size: int, *, ok: bool) -> None:
        if self._collector is not None:
            self._collector.record_read(
                self._location,
                size_bytes=size,
                read_ms=(time.perf_counter() - t0) * 1000,
                ok=ok,
            )

    def _record_parse(self, t0: float, keys: int, *, ok: bool) -> None:
        if self._collector is not None:
            self._collector.record_parse(
                self._location,
                keys=keys,
                parse_ms=(time.perf_counter() - t0) * 1000,
                ok=ok,
            )

    def _record_compile(self, t0: float, *, ok: bool) -> None:
        if self._collector is not None:
            self._collector.record_compile(
                self._location,
                compile_ms=(time.perf_counter() - t0) * 1000,
                ok=ok,
            )
