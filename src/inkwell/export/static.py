"""Static export — write every post to plain HTML files.

Resolves each post through the ContentContext, so a post already read
or compiled in the same process is not read or compiled again.  Output
follows the clean-URL convention::

    /2021/06/x    ->  output/2021/06/x/index.html
    /             ->  output/index.html   (post listing)

"""

from __future__ import annotations

import html
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from inkwell._errors import ContentError, ExportError
from inkwell.content.enumerator import discover_identities
from inkwell.export.sitemap import write_sitemap

if TYPE_CHECKING:
    from inkwell.content.item import ContentItem
    from inkwell.context import ContentContext, PostKey


_PAGE_SHELL = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
<h1>{title}</h1>
{body}
</body>
</html>
"""


@dataclass(frozen=True, slots=True)
class ExportedFile:
    """Record of a single file written during export.

    Attributes:
        href: Site-relative URL (e.g., ``"/2021/06/x"``).
        output_path: Absolute filesystem path to the written file.
        source_type: Category of the exported file.
        size_bytes: Size of the written file in bytes.
        duration_ms: Time taken to render and write this file.

    """

    href: str
    output_path: Path
    source_type: Literal["post", "index", "sitemap"]
    size_bytes: int
    duration_ms: float


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Aggregate result of a full static export.

    Attributes:
        files: All files written during export.
        total_posts: Number of posts exported.
        duration_ms: Total wall-clock time for the export.
        output_dir: Absolute path to the output directory.

    """

    files: tuple[ExportedFile, ...]
    total_posts: int
    duration_ms: float
    output_dir: Path


class StaticExporter:
    """Exports every post of a ContentContext as static HTML.

    Args:
        context: An initialized ContentContext.
        clean: Remove the output directory before writing.

    """

    def __init__(self, context: ContentContext, *, clean: bool = True) -> None:
        self._context = context
        self._clean = clean

    async def export(self) -> ExportResult:
        """Run the full export and return the result.

        Pipeline order:
            1. Clean output directory
            2. Render posts
            3. Render the post listing
            4. Generate sitemap (if base_url configured)

        Raises:
            ExportError: If any post fails to load, parse, or compile.

        """
        start = time.perf_counter()
        config = self._context.config
        output_dir = config.output_path

        if self._clean:
            self._clean_output(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        files: list[ExportedFile] = []
        posts = await self._render_posts(output_dir)
        files.extend(f for f, _data in posts)
        files.append(self._render_index(output_dir, [data for _f, data in posts]))

        sitemap = write_sitemap(files, config.base_url, output_dir)
        if sitemap is not None:
            files.append(sitemap)

        return ExportResult(
            files=tuple(files),
            total_posts=len(posts),
            duration_ms=(time.perf_counter() - start) * 1000,
            output_dir=output_dir,
        )

    async def export_post(self, key: PostKey) -> ExportedFile:
        """Re-export a single post (used by dev mode after a change)."""
        item = self._context.item(key)
        exported, _data = await self._render_post(item, self._context.config.output_path)
        return exported

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    def _clean_output(self, output_dir: Path) -> None:
        """Remove the output directory."""
        if output_dir.exists():
            shutil.rmtree(output_dir)

    async def _render_posts(
        self, output_dir: Path,
    ) -> list[tuple[ExportedFile, dict[str, Any]]]:
        results = []
        for identity in discover_identities(self._context.config):
            item = self._context.cache.lookup(identity)
            results.append(await self._render_post(item, output_dir))
        return results

    async def _render_post(
        self, item: ContentItem, output_dir: Path,
    ) -> tuple[ExportedFile, dict[str, Any]]:
        t0 = time.perf_counter()
        try:
            data = await item.data()
            bundle = await item.bundle()
        except ContentError as exc:
            msg = f"Failed to export post {item.location!r}: {exc}"
            raise ExportError(msg) from exc

        page = _PAGE_SHELL.format(
            title=html.escape(str(data.get("title", item.identity.slug))),
            body=bundle.html,
        )
        filepath = self._href_to_filepath(data["href"], output_dir)
        size = self._write_html(filepath, page)
        exported = ExportedFile(
            href=data["href"],
            output_path=filepath,
            source_type="post",
            size_bytes=size,
            duration_ms=(time.perf_counter() - t0) * 1000,
        )
        return exported, data

    def _render_index(self, output_dir: Path, posts: list[dict[str, Any]]) -> ExportedFile:
        t0 = time.perf_counter()
        entries = "\n".join(
            f'<li><a href="{html.escape(p["href"])}">'
            f"{html.escape(str(p.get('title', p['slug'])))}</a></li>"
            for p in posts
        )
        page = _PAGE_SHELL.format(title="Posts", body=f"<ul>\n{entries}\n</ul>")
        filepath = self._href_to_filepath("/", output_dir)
        size = self._write_html(filepath, page)
        return ExportedFile(
            href="/",
            output_path=filepath,
            source_type="index",
            size_bytes=size,
            duration_ms=(time.perf_counter() - t0) * 1000,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _href_to_filepath(href: str, output_dir: Path) -> Path:
        """Convert a site URL to an output file path.

        Clean URL convention:
            ``/``             -> ``output/index.html``
            ``/2021/06/x``    -> ``output/2021/06/x/index.html``

        """
        clean = href.strip("/")
        if not clean:
            return output_dir / "index.html"
        return output_dir / clean / "index.html"

    @staticmethod
    def _write_html(filepath: Path, page: str) -> int:
        """Write HTML to a file, creating parent dirs as needed.

        Returns the size in bytes of the written file.

        """
        filepath.parent.mkdir(parents=True, exist_ok=True)
        data = page.encode("utf-8")
        filepath.write_bytes(data)
        return len(data)
