"""Tests for inkwell.content.frontmatter — header split and parse."""

from __future__ import annotations

import datetime

import pytest

from inkwell._errors import ParseError
from inkwell.content.frontmatter import parse_frontmatter, split_frontmatter


class TestSplitFrontmatter:
    """split_frontmatter() — header/body separation."""

    def test_header_and_body(self) -> None:
        header, body = split_frontmatter("---\ntitle: A\n---\nBody\n")
        assert header == "title: A\n"
        assert body == "Body\n"

    def test_no_header(self) -> None:
        header, body = split_frontmatter("# Just markdown\n")
        assert header is None
        assert body == "# Just markdown\n"

    def test_crlf_line_endings(self) -> None:
        header, body = split_frontmatter("---\r\ntitle: A\r\n---\r\nBody\r\n")
        assert header == "title: A\r\n"
        assert body == "Body\r\n"

    def test_byte_order_mark_stripped(self) -> None:
        header, _body = split_frontmatter("\ufeff---\ntitle: A\n---\n")
        assert header == "title: A\n"

    def test_unterminated_strict(self) -> None:
        with pytest.raises(ParseError, match="not terminated"):
            split_frontmatter("---\ntitle: A\nBody\n")

    def test_unterminated_lenient(self) -> None:
        source = "---\ntitle: A\nBody\n"
        assert split_frontmatter(source, strict=False) == (None, source)

    def test_empty_source(self) -> None:
        assert split_frontmatter("") == (None, "")


class TestParseFrontmatter:
    """parse_frontmatter() — YAML header to mapping."""

    def test_scalars_and_arrays(self) -> None:
        meta = parse_frontmatter("---\ntitle: A\ntags: [x, y]\ndraft: false\n---\n")
        assert meta == {"title": "A", "tags": ["x", "y"], "draft": False}

    def test_dates_parsed(self) -> None:
        meta = parse_frontmatter("---\ndate: 2021-06-01\n---\n")
        assert meta["date"] == datetime.date(2021, 6, 1)

    def test_no_header_is_empty(self) -> None:
        assert parse_frontmatter("Body only\n") == {}

    def test_empty_header_is_empty(self) -> None:
        assert parse_frontmatter("---\n---\nBody\n") == {}

    def test_malformed_yaml(self) -> None:
        with pytest.raises(ParseError, match="malformed") as exc_info:
            parse_frontmatter("---\ntitle: [unclosed\n---\n", location="2021-06-x/index")
        assert exc_info.value.location == "2021-06-x/index"

    def test_non_mapping_header(self) -> None:
        with pytest.raises(ParseError, match="mapping"):
            parse_frontmatter("---\n- a\n- b\n---\n")

    def test_unterminated_header(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_frontmatter("---\ntitle: A\n", location="2021-06-x/index")
        assert exc_info.value.location == "2021-06-x/index"

    def test_required_fields_present(self) -> None:
        meta = parse_frontmatter("---\ntitle: A\n---\n", required=("title",))
        assert meta["title"] == "A"

    def test_required_fields_missing(self) -> None:
        with pytest.raises(ParseError, match="title"):
            parse_frontmatter("---\nauthor: B\n---\n", required=("title",))

    def test_required_fields_without_header(self) -> None:
        with pytest.raises(ParseError, match="title"):
            parse_frontmatter("Body\n", required=("title",))

    def test_keys_coerced_to_str(self) -> None:
        meta = parse_frontmatter("---\n2021: yes\n---\n")
        assert meta == {"2021": True}
