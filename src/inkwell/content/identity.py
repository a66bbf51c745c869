"""Post identity — the structured key that names one post.

A post is identified by its publication year, month, and short name.
Identities are frozen and hashable; two identities are equal iff all
three fields are equal.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from inkwell._errors import IdentityError
from inkwell._types import Properties

_YEAR = re.compile(r"[0-9]{4}")
_MONTH = re.compile(r"0[1-9]|1[0-2]")
_SLUG = re.compile(r"[a-z0-9][a-z0-9_-]*")

# Directory name of a post: "2021-06-improving-nextjs-file-performance"
DIRECTORY_PATTERN = re.compile(r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<slug>.+)")


@dataclass(frozen=True, slots=True)
class PostIdentity:
    """Identity of a single post.

    Attributes:
        year: Four-digit publication year, e.g. ``"2021"``.
        month: Two-digit publication month, ``"01"`` to ``"12"``.
        slug: Short name: lowercase letters, digits, ``-`` and ``_``.

    Raises:
        IdentityError: If any field is malformed.

    """

    year: str
    month: str
    slug: str

    def __post_init__(self) -> None:
        if not isinstance(self.year, str) or not _YEAR.fullmatch(self.year):
            msg = f"Invalid year {self.year!r}: expected four digits"
            raise IdentityError(msg)
        if not isinstance(self.month, str) or not _MONTH.fullmatch(self.month):
            msg = f"Invalid month {self.month!r}: expected 01-12"
            raise IdentityError(msg)
        if not isinstance(self.slug, str) or not _SLUG.fullmatch(self.slug):
            msg = f"Invalid slug {self.slug!r}: expected lowercase letters, digits, '-' or '_'"
            raise IdentityError(msg)

    @property
    def href(self) -> str:
        """Site-relative URL of the post."""
        return f"/{self.year}/{self.month}/{self.slug}"

    def properties(self) -> Properties:
        """Identity-derived data, available without I/O."""
        return {
            "year": self.year,
            "month": self.month,
            "slug": self.slug,
            "href": self.href,
        }

    def route_params(self) -> list[str]:
        """Catch-all route segments, e.g. ``["2021", "06", "x"]``."""
        return [self.year, self.month, self.slug]

    @classmethod
    def from_route(cls, segments: Sequence[str] | str) -> PostIdentity:
        """Build an identity from catch-all route segments.

        Accepts ``["2021", "06", "x"]`` or ``"2021/06/x"`` (leading and
        trailing slashes ignored).

        """
        if isinstance(segments, str):
            segments = [s for s in segments.split("/") if s]
        if len(segments) != 3:
            msg = f"Expected year/month/slug, got {list(segments)!r}"
            raise IdentityError(msg)
        year, month, slug = segments
        return cls(year=year, month=month, slug=slug)

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> PostIdentity:
        """Build an identity from ``{"year": ..., "month": ..., "slug": ...}``."""
        try:
            return cls(year=data["year"], month=data["month"], slug=data["slug"])  # type: ignore[arg-type]
        except KeyError as exc:
            msg = f"Identity is missing field {exc.args[0]!r}"
            raise IdentityError(msg) from exc

    @classmethod
    def from_directory(cls, name: str) -> PostIdentity:
        """Parse a post directory name like ``2021-06-x``."""
        match = DIRECTORY_PATTERN.fullmatch(name)
        if match is None:
            msg = f"Not a post directory name: {name!r}"
            raise IdentityError(msg)
        return cls(year=match["year"], month=match["month"], slug=match["slug"])
