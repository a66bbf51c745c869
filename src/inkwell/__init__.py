"""Inkwell — lazily cached blog posts for iterative builds.

Resolves a post from its identity straight to its source file, then
reads, parses, and compiles it at most once until the file changes.

Quick start::

    import inkwell

    inkwell.build("my-blog/")         # Static export
    inkwell.dev("my-blog/")           # Export, then rebuild on change

Programmatic lookups::

    from inkwell import ContentContext, load_config

    with ContentContext(load_config(Path("my-blog"))) as ctx:
        post = await ctx.get_post("2021/06/x", ["title", "content"])
        bundle = await ctx.item("2021/06/x").bundle()

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "ContentContext",
    "InkwellConfig",
    "PostIdentity",
    "__version__",
    "build",
    "dev",
    "load_config",
    "show",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import inkwell`` fast; watchfiles and yaml load on first use.
    """
    if name == "InkwellConfig":
        from inkwell.config import InkwellConfig

        return InkwellConfig

    if name == "load_config":
        from inkwell.config_loader import load_config

        return load_config

    if name == "ContentContext":
        from inkwell.context import ContentContext

        return ContentContext

    if name == "PostIdentity":
        from inkwell.content.identity import PostIdentity

        return PostIdentity

    if name in ("build", "dev", "show"):
        from inkwell import app

        return getattr(app, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
