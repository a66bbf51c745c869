"""Inkwell CLI — inkwell build / inkwell dev / inkwell show.

Entry point for the ``inkwell`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys

from inkwell._errors import InkwellError


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the inkwell CLI."""
    parser = argparse.ArgumentParser(
        prog="inkwell",
        description="Lazily cached blog post resolution and static export.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # inkwell build
    build_parser = subparsers.add_parser("build", help="Export posts as static HTML files")
    build_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    build_parser.add_argument("--output", default=None, help="Output directory")
    build_parser.add_argument("--base-url", default=None, help="Base URL for sitemap generation")

    # inkwell dev
    dev_parser = subparsers.add_parser("dev", help="Export, then rebuild posts as they change")
    dev_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    dev_parser.add_argument("--output", default=None, help="Output directory")

    # inkwell show
    show_parser = subparsers.add_parser("show", help="Print one post as JSON")
    show_parser.add_argument("post", help="Post as YEAR/MONTH/SLUG")
    show_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    show_parser.add_argument(
        "--field", action="append", dest="fields", help="Field to include (repeatable)",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from inkwell import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from inkwell.app import build, dev, show

    try:
        if args.command == "build":
            build(root=args.root, output=args.output, base_url=args.base_url)
        elif args.command == "dev":
            dev(root=args.root, output=args.output)
        elif args.command == "show":
            show(args.post, root=args.root, fields=args.fields)
    except InkwellError as exc:
        print(f"inkwell: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
