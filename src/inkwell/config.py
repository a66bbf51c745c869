"""Inkwell configuration.

InkwellConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class InkwellConfig:
    """Configuration for an inkwell content root.

    Attributes:
        root: Path to the site root directory (contains posts/).
              Always resolved to an absolute path on construction.
        content_dir: Directory holding one sub-directory per post.
        extension: File extension of post sources (including the dot).
        index_name: File stem of the source inside each post directory.
        output: Output directory for static export.
        base_url: Base URL for the site (used for sitemap generation).
        required_fields: Front-matter keys every post must define.
        debounce_ms: Watcher debounce window in dev mode.

    """

    root: Path = field(default_factory=Path.cwd)
    content_dir: str = "posts"
    extension: str = ".mdx"
    index_name: str = "index"
    output: Path = field(default_factory=lambda: Path("dist"))
    base_url: str = ""
    required_fields: tuple[str, ...] = ("title",)
    debounce_ms: int = 300

    def __post_init__(self) -> None:
        # watchfiles reports absolute paths; Path.relative_to() needs both sides absolute.
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        if not self.extension.startswith("."):
            object.__setattr__(self, "extension", "." + self.extension)
        if not isinstance(self.required_fields, tuple):
            object.__setattr__(self, "required_fields", tuple(self.required_fields))

    @property
    def content_path(self) -> Path:
        """Absolute path to the posts directory."""
        return self.root / self.content_dir

    @property
    def output_path(self) -> Path:
        """Absolute path to output directory."""
        if self.output.is_absolute():
            return self.output
        return self.root / self.output
