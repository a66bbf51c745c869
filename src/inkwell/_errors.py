"""Inkwell error hierarchy.

All inkwell-specific errors inherit from InkwellError for easy catching.
Content errors carry the Location of the item that failed.
"""


class InkwellError(Exception):
    """Base error for all inkwell operations."""


class ConfigError(InkwellError):
    """Invalid or missing configuration."""


class IdentityError(InkwellError):
    """A post identity is malformed and cannot be resolved to a location."""


class ExportError(InkwellError):
    """Error during static export."""


class ContentError(InkwellError):
    """Error while producing a derived value of a content item.

    Attributes:
        location: Location of the item that failed.

    """

    def __init__(self, message: str, *, location: str = "") -> None:
        super().__init__(message)
        self.location = location


class NotFound(ContentError):
    """The location has no backing file."""


class ReadError(ContentError):
    """The backing file exists but could not be read."""


class ParseError(ContentError):
    """The front-matter header is malformed or lacks required fields."""


class CompileError(ContentError):
    """The body failed to compile.

    Attributes:
        diagnostic: The compiler's own error message.

    """

    def __init__(self, message: str, *, location: str = "", diagnostic: str = "") -> None:
        super().__init__(message, location=location)
        self.diagnostic = diagnostic
