"""Front-matter — the YAML header at the top of a post source.

A source file looks like::

    ---
    title: Improving Next.js file performance
    tags: [nextjs, performance]
    ---

    Body in markup...

The header is optional.  When present it must be a YAML mapping and must
be closed by a second ``---`` line.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import yaml

from inkwell._errors import ParseError

_DELIMITER = "---"


def _is_delimiter(line: str) -> bool:
    return line.rstrip("\r\n").rstrip() == _DELIMITER


def split_frontmatter(raw: str, *, strict: bool = True) -> tuple[str | None, str]:
    """Split a source into ``(header, body)``.

    Returns ``(None, raw)`` when the source has no header.  An opening
    delimiter without a closing one raises ParseError when *strict*,
    otherwise the whole source is treated as body.

    """
    text = raw.removeprefix("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or not _is_delimiter(lines[0]):
        return None, text

    for i in range(1, len(lines)):
        if _is_delimiter(lines[i]):
            return "".join(lines[1:i]), "".join(lines[i + 1 :])

    if strict:
        msg = "Front-matter header is not terminated by '---'"
        raise ParseError(msg)
    return None, text


def parse_frontmatter(
    raw: str,
    *,
    location: str = "",
    required: Iterable[str] = (),
) -> dict[str, Any]:
    """Parse the header of *raw* into a metadata mapping.

    Raises:
        ParseError: On an unterminated header, invalid YAML, a header that
            is not a mapping, or missing *required* keys.

    """
    try:
        header, _body = split_frontmatter(raw)
    except ParseError as exc:
        raise ParseError(f"{location}: {exc}", location=location) from None

    metadata: dict[str, Any] = {}
    if header is not None and header.strip():
        try:
            loaded = yaml.safe_load(header)
        except yaml.YAMLError as exc:
            msg = f"{location}: malformed front-matter: {exc}"
            raise ParseError(msg, location=location) from exc
        if loaded is not None and not isinstance(loaded, dict):
            msg = f"{location}: front-matter must be a mapping, got {type(loaded).__name__}"
            raise ParseError(msg, location=location)
        metadata = {str(k): v for k, v in (loaded or {}).items()}

    missing = [name for name in required if name not in metadata]
    if missing:
        msg = f"{location}: missing required front-matter field(s): {', '.join(missing)}"
        raise ParseError(msg, location=location)

    return metadata
