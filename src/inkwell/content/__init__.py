"""Content layer — posts as lazily resolved, cached items.

Resolves post identities to locations without scanning, caches one
ContentItem per location, and invalidates items when the watcher sees
their source change.
"""

from inkwell.content.cache import ItemCache
from inkwell.content.compiler import Bundle, MarkdownCompiler
from inkwell.content.enumerator import discover_locations, list_posts, static_paths
from inkwell.content.identity import PostIdentity
from inkwell.content.item import ContentItem
from inkwell.content.resolver import location_for_path, location_path, resolve
from inkwell.content.slot import CacheSlot
from inkwell.content.watcher import ChangeEvent, ContentWatcher, apply_invalidations

__all__ = [
    "Bundle",
    "CacheSlot",
    "ChangeEvent",
    "ContentItem",
    "ContentWatcher",
    "ItemCache",
    "MarkdownCompiler",
    "PostIdentity",
    "apply_invalidations",
    "discover_locations",
    "list_posts",
    "location_for_path",
    "location_path",
    "resolve",
    "static_paths",
]
