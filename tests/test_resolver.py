"""Tests for inkwell.content.resolver — pure identity-to-location mapping."""

from __future__ import annotations

from pathlib import Path

import pytest

from inkwell._errors import IdentityError
from inkwell.config import InkwellConfig
from inkwell.content.identity import PostIdentity
from inkwell.content.resolver import (
    identity_for_location,
    location_for_path,
    location_path,
    resolve,
)


@pytest.fixture
def config(tmp_path: Path) -> InkwellConfig:
    """A config rooted at an empty temp directory (no posts on disk)."""
    return InkwellConfig(root=tmp_path)


class TestResolve:
    """resolve() — pure, total, collision-free."""

    def test_canonical_form(self) -> None:
        assert resolve(PostIdentity("2021", "06", "x")) == "2021-06-x/index"

    def test_custom_index_name(self) -> None:
        assert resolve(PostIdentity("2021", "06", "x"), index_name="README") == "2021-06-x/README"

    def test_pure_and_independent_of_disk(self, tmp_path: Path) -> None:
        identity = PostIdentity("2021", "06", "x")
        before = resolve(identity)
        (tmp_path / "posts" / "2021-06-x").mkdir(parents=True)
        assert resolve(identity) == before
        assert resolve(PostIdentity("2021", "06", "x")) == before

    def test_distinct_identities_do_not_collide(self) -> None:
        identities = [
            PostIdentity(year, month, slug)
            for year in ("2020", "2021")
            for month in ("01", "06", "12")
            for slug in ("x", "06-x", "x-y", "12")
        ]
        locations = {resolve(i) for i in identities}
        assert len(locations) == len(identities)

    def test_slug_with_dashes_is_unambiguous(self) -> None:
        a = PostIdentity("2021", "06", "06-x")
        b = PostIdentity("2021", "06", "x")
        assert resolve(a) != resolve(b)


class TestIdentityForLocation:
    """identity_for_location() — inverse of resolve()."""

    def test_round_trip(self) -> None:
        identity = PostIdentity("2021", "06", "improving-nextjs-file-performance")
        assert identity_for_location(resolve(identity)) == identity

    def test_rejects_non_canonical(self) -> None:
        with pytest.raises(IdentityError):
            identity_for_location("2021-06-x")
        with pytest.raises(IdentityError):
            identity_for_location("drafts/index")


class TestLocationPaths:
    """location_path() and location_for_path()."""

    def test_location_path(self, config: InkwellConfig) -> None:
        path = location_path(config, "2021-06-x/index")
        assert path == config.content_path / "2021-06-x" / "index.mdx"

    def test_path_maps_back_to_location(self, config: InkwellConfig) -> None:
        path = config.content_path / "2021-06-x" / "index.mdx"
        assert location_for_path(config, path) == "2021-06-x/index"

    def test_wrong_extension(self, config: InkwellConfig) -> None:
        path = config.content_path / "2021-06-x" / "index.md"
        assert location_for_path(config, path) is None

    def test_sibling_asset_ignored(self, config: InkwellConfig) -> None:
        path = config.content_path / "2021-06-x" / "cover.png"
        assert location_for_path(config, path) is None

    def test_wrong_depth(self, config: InkwellConfig) -> None:
        assert location_for_path(config, config.content_path / "index.mdx") is None
        deep = config.content_path / "2021-06-x" / "nested" / "index.mdx"
        assert location_for_path(config, deep) is None

    def test_invalid_directory_name(self, config: InkwellConfig) -> None:
        path = config.content_path / "drafts" / "index.mdx"
        assert location_for_path(config, path) is None

    def test_outside_content_dir(self, config: InkwellConfig) -> None:
        assert location_for_path(config, Path("/elsewhere/2021-06-x/index.mdx")) is None

    def test_respects_config(self, tmp_path: Path) -> None:
        config = InkwellConfig(root=tmp_path, content_dir="articles", extension=".md")
        path = tmp_path / "articles" / "2021-06-x" / "index.md"
        assert location_for_path(config, path) == "2021-06-x/index"
