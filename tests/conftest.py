"""Shared test fixtures for inkwell."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from inkwell.config import InkwellConfig
from inkwell.content.cache import ItemCache
from inkwell.observability.collector import CacheCollector

POST_SOURCE = (
    "---\ntitle: Improving file performance\ntags: [nextjs, performance]\n---\n\n"
    "# Improving file performance\n\nHello world.\n"
)


@pytest.fixture
def blog(tmp_path: Path) -> Path:
    """Create a minimal blog root with two posts under posts/.

    Returns the path to the blog root.
    """
    write_post(tmp_path, "2021-06-improving-nextjs-file-performance", POST_SOURCE)
    write_post(
        tmp_path,
        "2020-12-hello-world",
        "---\ntitle: Hello World\n---\n\nFirst post.\n",
    )
    return tmp_path


@pytest.fixture
def config(blog: Path) -> InkwellConfig:
    """An InkwellConfig rooted at the blog fixture."""
    return InkwellConfig(root=blog)


@pytest.fixture
def collector() -> CacheCollector:
    return CacheCollector()


@pytest.fixture
def compiler() -> CountingCompiler:
    return CountingCompiler()


@pytest.fixture
def cache(
    config: InkwellConfig,
    compiler: CountingCompiler,
    collector: CacheCollector,
) -> ItemCache:
    """ItemCache over the blog fixture with a counting compiler."""
    return ItemCache(config, compiler=compiler, collector=collector)


def write_post(root: Path, directory: str, source: str, *, content_dir: str = "posts") -> Path:
    """Write ``root/posts/<directory>/index.mdx`` and return its path."""
    path = root / content_dir / directory / "index.mdx"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source, encoding="utf-8")
    return path


class CountingCompiler:
    """Async compiler stand-in that counts calls.

    Suspends for *delay* seconds so concurrent callers overlap, then
    wraps the body in ``<main>``.  Raises *error* instead when set.
    """

    def __init__(self, *, delay: float = 0.01, error: Exception | None = None) -> None:
        self.calls = 0
        self.sources: list[str] = []
        self.delay = delay
        self.error = error

    async def __call__(self, source: str) -> str:
        self.calls += 1
        self.sources.append(source)
        await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return f"<main>{source.strip()}</main>"
