"""Tests for inkwell.app — build, show, and the dev session loop."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from inkwell._errors import ConfigError
from inkwell.app import _dev_session, build, show
from inkwell.config import InkwellConfig
from inkwell.content.watcher import ChangeEvent
from inkwell.context import ContentContext
from inkwell.export.static import StaticExporter
from inkwell.observability.events import ContentRead
from tests.conftest import CountingCompiler


@pytest.fixture(autouse=True)
def _counting_compiler():
    """Keep the app off the real Markdown compiler."""
    with patch("inkwell.content.cache.MarkdownCompiler", CountingCompiler):
        yield


class TestBuild:
    """build() — one-shot export."""

    def test_exports_posts(self, blog: Path, capsys: pytest.CaptureFixture[str]) -> None:
        result = build(blog, base_url="https://example.com")

        assert result.total_posts == 2
        assert (blog / "dist" / "2020" / "12" / "hello-world" / "index.html").is_file()
        assert (blog / "dist" / "sitemap.xml").is_file()
        assert "Exported 2 posts" in capsys.readouterr().err

    def test_output_override(self, blog: Path, tmp_path: Path) -> None:
        out = tmp_path / "public"
        build(blog, output=str(out))
        assert (out / "index.html").is_file()

    def test_missing_content_dir(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Content directory not found"):
            build(tmp_path)


class TestShow:
    """show() — single-post lookup."""

    def test_prints_json(self, blog: Path, capsys: pytest.CaptureFixture[str]) -> None:
        post = show("2021/06/improving-nextjs-file-performance", blog, fields=["title", "href"])

        assert post == {
            "title": "Improving file performance",
            "href": "/2021/06/improving-nextjs-file-performance",
        }
        assert json.loads(capsys.readouterr().out) == post

    def test_default_fields(self, blog: Path) -> None:
        post = show("2020/12/hello-world", blog)
        assert post == {"title": "Hello World", "href": "/2020/12/hello-world"}


class _FakeWatcher:
    """Stands in for ContentWatcher with a fixed list of events."""

    def __init__(self, events: list[ChangeEvent]) -> None:
        self._events = events

    async def changes(self):  # type: ignore[no-untyped-def]
        for event in self._events:
            yield event


class TestDevSession:
    """_dev_session — initial export then per-change rebuilds."""

    @pytest.mark.asyncio
    async def test_rebuilds_changed_post(
        self, blog: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        config = InkwellConfig(root=blog)
        path = config.content_path / "2020-12-hello-world" / "index.mdx"
        events = [
            ChangeEvent(location="2020-12-hello-world/index", kind="modified", path=path),
            ChangeEvent(location="2019-01-gone/index", kind="removed", path=path),
        ]

        with ContentContext(config, compiler=CountingCompiler()) as context:
            exporter = StaticExporter(context)
            path.write_text("---\ntitle: Hello\n---\nFirst.\n")
            await _dev_session(context, exporter, _FakeWatcher(events))  # type: ignore[arg-type]
            # Initial export read the new text; the event forced a second read.
            assert context.collector.log.count(ContentRead, location=events[0].location) == 2

        err = capsys.readouterr().err
        assert "Rebuilt /2020/12/hello-world" in err
        assert "Removed 2019-01-gone/index" in err

    @pytest.mark.asyncio
    async def test_rebuild_error_reported(
        self, blog: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        config = InkwellConfig(root=blog)
        path = config.content_path / "2020-12-hello-world" / "index.mdx"
        events = [ChangeEvent(location="2020-12-hello-world/index", kind="modified", path=path)]

        with ContentContext(config, compiler=CountingCompiler()) as context:
            exporter = StaticExporter(context)
            await exporter.export()
            path.write_text("---\ntitle: [broken\n---\n")
            await _dev_session(context, exporter, _FakeWatcher(events))  # type: ignore[arg-type]

        assert "Rebuild error" in capsys.readouterr().err
