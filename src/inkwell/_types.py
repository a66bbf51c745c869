"""Shared type definitions for inkwell."""

from typing import Any, Literal

# Canonical item address, e.g. "2021-06-improving-nextjs-file-performance/index"
type Location = str

# Filesystem change kind delivered by the watcher
type ChangeKind = Literal["created", "modified", "removed"]

# Identity-derived data: year, month, slug, href
type Properties = dict[str, str]

# Front-matter merged with Properties
type PostData = dict[str, Any]
