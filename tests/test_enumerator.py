"""Tests for inkwell.content.enumerator — full listings for routes."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from inkwell._errors import ParseError
from inkwell.config import InkwellConfig
from inkwell.content.cache import ItemCache
from inkwell.content.enumerator import (
    discover_identities,
    discover_locations,
    list_posts,
    static_paths,
)
from inkwell.observability.collector import CacheCollector
from inkwell.observability.events import ContentRead
from tests.conftest import CountingCompiler, write_post


class TestDiscover:
    """discover_identities / discover_locations — directory scan."""

    def test_newest_first(self, config: InkwellConfig) -> None:
        assert discover_locations(config) == [
            "2021-06-improving-nextjs-file-performance/index",
            "2020-12-hello-world/index",
        ]

    def test_skips_non_post_entries(self, blog: Path, config: InkwellConfig) -> None:
        (config.content_path / "drafts").mkdir()
        (config.content_path / "drafts" / "index.mdx").write_text("---\ntitle: D\n---\n")
        (config.content_path / "2022-01-empty").mkdir()
        (config.content_path / "README.md").write_text("notes")

        assert len(discover_identities(config)) == 2

    def test_missing_content_dir(self, tmp_path: Path) -> None:
        assert discover_locations(InkwellConfig(root=tmp_path)) == []


class TestListPosts:
    """list_posts — projections via the cache."""

    @pytest.mark.asyncio
    async def test_projects_fields(self, cache: ItemCache) -> None:
        posts = await list_posts(cache, ["slug", "title"])
        assert posts == [
            {"slug": "improving-nextjs-file-performance", "title": "Improving file performance"},
            {"slug": "hello-world", "title": "Hello World"},
        ]

    @pytest.mark.asyncio
    async def test_limit(self, cache: ItemCache) -> None:
        posts = await list_posts(cache, ["slug"], limit=1)
        assert [p["slug"] for p in posts] == ["improving-nextjs-file-performance"]

    @pytest.mark.asyncio
    async def test_zero_limit_means_all(self, cache: ItemCache) -> None:
        assert len(await list_posts(cache, ["slug"], limit=0)) == 2

    @pytest.mark.asyncio
    async def test_property_fields_do_not_read(
        self, cache: ItemCache, collector: CacheCollector,
    ) -> None:
        await list_posts(cache, ["slug", "href"])
        assert collector.log.count(ContentRead) == 0

    @pytest.mark.asyncio
    async def test_reuses_cached_items(
        self, cache: ItemCache, collector: CacheCollector,
    ) -> None:
        await cache.get("2020-12-hello-world/index").content()
        await list_posts(cache, ["title"])
        assert collector.log.count(ContentRead, location="2020-12-hello-world/index") == 1

    @pytest.mark.asyncio
    async def test_vanished_post_skipped(self, cache: ItemCache) -> None:
        with patch(
            "inkwell.content.enumerator.discover_locations",
            return_value=["2021-06-improving-nextjs-file-performance/index", "2019-01-gone/index"],
        ):
            posts = await list_posts(cache, ["slug", "title"])
        assert [p["slug"] for p in posts] == ["improving-nextjs-file-performance"]

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self, tmp_path: Path) -> None:
        write_post(tmp_path, "2021-06-x", "---\ntitle: [bad\n---\n")
        cache = ItemCache(InkwellConfig(root=tmp_path), compiler=CountingCompiler())
        with pytest.raises(ParseError):
            await list_posts(cache, ["title"])


class TestStaticPaths:
    """static_paths — catch-all route params."""

    def test_route_params(self, config: InkwellConfig) -> None:
        assert static_paths(config) == [
            {"params": {"slug": ["2021", "06", "improving-nextjs-file-performance"]}},
            {"params": {"slug": ["2020", "12", "hello-world"]}},
        ]
