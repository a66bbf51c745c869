"""Path resolver — identity to canonical location, without touching disk.

``resolve`` is pure: the location of a post is computed from its
identity alone, so a single-item lookup never has to list the content
directory.  Whether the file exists is only discovered when the item is
first read.

Location format::

    {year}-{month}-{slug}/{index_name}      e.g. "2021-06-x/index"

All identity fields participate.  Year and month are fixed width, so the
``-`` separators are unambiguous and distinct identities never collide.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from inkwell._errors import IdentityError
from inkwell.content.identity import PostIdentity

if TYPE_CHECKING:
    from inkwell._types import Location
    from inkwell.config import InkwellConfig

DEFAULT_INDEX_NAME = "index"


def resolve(identity: PostIdentity, *, index_name: str = DEFAULT_INDEX_NAME) -> Location:
    """Return the canonical location for *identity*."""
    return f"{identity.year}-{identity.month}-{identity.slug}/{index_name}"


def identity_for_location(location: Location) -> PostIdentity:
    """Recover the identity encoded in a canonical location.

    Raises:
        IdentityError: If *location* is not of the canonical form.

    """
    parts = PurePosixPath(location).parts
    if len(parts) != 2:
        msg = f"Not a canonical location: {location!r}"
        raise IdentityError(msg)
    return PostIdentity.from_directory(parts[0])


def location_path(config: InkwellConfig, location: Location) -> Path:
    """Absolute path of the source file backing *location*."""
    return config.content_path / (location + config.extension)


def location_for_path(config: InkwellConfig, path: Path) -> Location | None:
    """Map a source file path back to its location.

    Returns None for anything that is not a post source: files outside
    the content directory, at the wrong depth, with the wrong name or
    extension, or in a directory whose name is not a valid identity.

    """
    try:
        rel = Path(path).relative_to(config.content_path)
    except ValueError:
        return None

    parts = rel.parts
    if len(parts) != 2:
        return None
    if parts[1] != config.index_name + config.extension:
        return None

    try:
        identity = PostIdentity.from_directory(parts[0])
    except IdentityError:
        return None
    return resolve(identity, index_name=config.index_name)
