"""Sitemap generation — produce sitemap.xml from exported posts.

Generates a standard sitemap.xml file listing every exported post.
Requires ``base_url`` to be configured; skips generation with a notice
when it is empty.
"""

from __future__ import annotations

import sys
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from xml.etree.ElementTree import Element, SubElement, tostring

if TYPE_CHECKING:
    from pathlib import Path

    from inkwell.export.static import ExportedFile

# XML namespace for sitemaps
_SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def generate_sitemap(
    pages: tuple[ExportedFile, ...] | list[ExportedFile],
    base_url: str,
) -> str:
    """Generate a sitemap.xml string from exported page records.

    Only ``"post"`` and ``"index"`` records are listed.

    Args:
        pages: Exported file records from the build.
        base_url: Site base URL (e.g., ``"https://example.com"``).

    Returns:
        Complete XML string suitable for writing to ``sitemap.xml``.

    """
    base = base_url.rstrip("/")
    now = datetime.now(UTC).strftime("%Y-%m-%d")

    urlset = Element("urlset")
    urlset.set("xmlns", _SITEMAP_NS)

    for page in pages:
        if page.source_type not in ("post", "index"):
            continue

        url_el = SubElement(urlset, "url")
        loc = SubElement(url_el, "loc")
        loc.text = base + page.href

        lastmod = SubElement(url_el, "lastmod")
        lastmod.text = now

    xml = tostring(urlset, encoding="unicode", xml_declaration=False)
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + xml + "\n"


def write_sitemap(
    pages: tuple[ExportedFile, ...] | list[ExportedFile],
    base_url: str,
    output_dir: Path,
) -> ExportedFile | None:
    """Write sitemap.xml to the output directory.

    Returns *None* (with a notice on stderr) if ``base_url`` is empty.

    """
    from inkwell.export.static import ExportedFile

    if not base_url:
        print("  Sitemap skipped — set base_url in config to enable", file=sys.stderr)
        return None

    t0 = time.perf_counter()
    data = generate_sitemap(pages, base_url).encode("utf-8")

    sitemap_path = output_dir / "sitemap.xml"
    sitemap_path.write_bytes(data)
    elapsed = (time.perf_counter() - t0) * 1000

    return ExportedFile(
        href="/sitemap.xml",
        output_path=sitemap_path,
        source_type="sitemap",
        size_bytes=len(data),
        duration_ms=elapsed,
    )
