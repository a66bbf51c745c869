"""Bundle compiler — turns a post body into renderable output.

The compiler is a collaborator injected into the ItemCache.  Any callable
taking the body text and returning a string (or an awaitable of one)
qualifies.  ``MarkdownCompiler`` is the default and renders with
Patitas off the event loop.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any

type Compiler = Callable[[str], str | Awaitable[str]]


@dataclass(frozen=True, slots=True)
class Bundle:
    """Compiled output of one post body.

    Attributes:
        location: Location of the compiled item.
        html: Renderable output produced by the compiler.
        compile_ms: Time spent compiling in milliseconds.

    """

    location: str
    html: str
    compile_ms: float


async def run_compiler(compiler: Compiler, body: str) -> str:
    """Invoke a sync or async compiler and return its output."""
    result = compiler(body)
    if inspect.isawaitable(result):
        result = await result
    return result


class MarkdownCompiler:
    """Markdown-to-HTML compiler backed by Patitas.

    The Patitas renderer is created on first use.  Rendering runs in a
    worker thread so a long post does not stall other lookups.

    Args:
        plugins: Patitas plugins to enable.

    """

    __slots__ = ("_md", "_plugins")

    def __init__(self, plugins: Sequence[str] = ("table",)) -> None:
        self._plugins = list(plugins)
        self._md: Any = None

    def _renderer(self) -> Any:
        if self._md is None:
            from patitas import Markdown

            self._md = Markdown(plugins=self._plugins)
        return self._md

    async def __call__(self, source: str) -> str:
        md = self._renderer()
        return await asyncio.to_thread(md, source)
