"""Inkwell application entry points — build, dev, and show.

Each entry point owns exactly one ContentContext for its process
lifetime:

- ``build``: one-shot export.  The cache is dropped when the process
  ends; there is no watcher.
- ``dev``: long-lived.  The cache persists across rebuilds and the
  watcher invalidates items in place as their sources change.
- ``show``: resolve and print a single post.
"""

from __future__ import annotations

import asyncio
import json
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

from inkwell._errors import ConfigError, InkwellError
from inkwell.config_loader import load_config
from inkwell.context import ContentContext

if TYPE_CHECKING:
    from inkwell.content.watcher import ContentWatcher
    from inkwell.export.static import ExportResult, StaticExporter


def build(root: str | Path = ".", **kwargs: object) -> ExportResult:
    """Export every post as static HTML.

    Args:
        root: Path to the site root directory.
        **kwargs: Override InkwellConfig fields.

    """
    from inkwell.export.static import StaticExporter

    config = load_config(Path(root), **kwargs)
    _require_content_dir(config.content_path)

    with ContentContext(config) as context:
        result = asyncio.run(StaticExporter(context).export())
        _print_export_summary(result, context)
    return result


def dev(root: str | Path = ".", **kwargs: object) -> None:
    """Export once, then re-export posts as their sources change.

    Runs until interrupted.  The ItemCache lives for the whole session,
    so untouched posts are never re-read or re-compiled.

    Args:
        root: Path to the site root directory.
        **kwargs: Override InkwellConfig fields.

    """
    from inkwell.content.watcher import ContentWatcher
    from inkwell.export.static import StaticExporter

    config = load_config(Path(root), **kwargs)
    _require_content_dir(config.content_path)

    with ContentContext(config) as context:
        exporter = StaticExporter(context)
        watcher = ContentWatcher(config)
        try:
            asyncio.run(_dev_session(context, exporter, watcher))
        except KeyboardInterrupt:
            watcher.stop()
            print("\n  Stopped.", file=sys.stderr)


def show(
    key: str,
    root: str | Path = ".",
    *,
    fields: list[str] | None = None,
    **kwargs: object,
) -> dict[str, Any]:
    """Resolve one post by ``YEAR/MONTH/SLUG`` and print it as JSON.

    Only the requested post is read; the posts directory is not listed.

    """
    config = load_config(Path(root), **kwargs)
    with ContentContext(config) as context:
        post = asyncio.run(context.get_post(key, fields or ["title", "href"]))
    print(json.dumps(post, indent=2, default=str))
    return post


async def _dev_session(
    context: ContentContext,
    exporter: StaticExporter,
    watcher: ContentWatcher,
) -> None:
    """Initial export, then one re-export per changed post."""
    try:
        result = await exporter.export()
        _print_export_summary(result, context)
    except InkwellError as exc:
        print(f"  Export error: {exc}", file=sys.stderr)

    print(f"  Watching {context.config.content_path}", file=sys.stderr)

    async for event in watcher.changes():
        context.cache.invalidate(event.location, reason=event.kind)
        if event.kind == "removed":
            print(f"  Removed {event.location}", file=sys.stderr)
            continue

        t0 = time.perf_counter()
        try:
            exported = await exporter.export_post(context.cache.get(event.location).identity)
        except InkwellError as exc:
            print(f"  Rebuild error: {exc}", file=sys.stderr)
            continue
        ms = (time.perf_counter() - t0) * 1000
        print(f"  Rebuilt {exported.href} in {ms:.0f}ms", file=sys.stderr)


def _require_content_dir(path: Path) -> None:
    if not path.is_dir():
        msg = f"Content directory not found: {path}"
        raise ConfigError(msg)


def _print_export_summary(result: ExportResult, context: ContentContext) -> None:
    """Print export completion summary to stderr."""
    stats = context.collector.summary()
    lines = [
        "",
        "─" * 41,
        f"  Exported {result.total_posts} post{'s' if result.total_posts != 1 else ''}",
        f"  Reads {stats['reads']}  compiles {stats['compiles']}  cache hits {stats['hits']}",
        f"  Output: {result.output_dir}",
        f"  Done in {result.duration_ms:.0f}ms",
    ]
    print("\n".join(lines), file=sys.stderr)
