"""
Directive processor.

Directive comments start with a comment prefix followed by an equal sign
and must live in the header of the source file:

    // JavaScript
    //= require "foo"

    # CoffeeScript
    #= require_tree ./lib

    /* CSS
     *= require reset
     */

Directives do not substitute content at their position: their side effects
go into the BuildSession, which hoists required content above the body.
"""

from __future__ import annotations

import inspect
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple

from .base import Processor
from .header import split_header
from ..errors import MalformedArgumentsError, UndefinedDirectiveError

if TYPE_CHECKING:
    from ..session import BuildSession

logger = logging.getLogger(__name__)

DirectiveHandler = Callable[..., Any]

_DIRECTIVE_RE = re.compile(r'^\W*=\s*(\w+.*?)(\*/)?\s*$')


@dataclass(frozen=True)
class Directive:
    line_index: int
    name: str
    args: Tuple[str, ...] = ()


@dataclass
class ParsedSource:
    header: str
    body: str
    directives: List[Directive] = field(default_factory=list)

    def processed_header(self) -> str:
        """Header with every directive line replaced by a blank line."""
        directive_lines = {d.line_index for d in self.directives}
        out = []
        for i, line in enumerate(self.header.splitlines(keepends=True)):
            if i in directive_lines:
                out.append("\n" if line.endswith("\n") else "")
            else:
                out.append(line)
        return "".join(out)

    def processed_source(self) -> str:
        return self.processed_header() + self.body


def split_arguments(text: str, source: Optional[Path] = None, line_index: Optional[int] = None) -> List[str]:
    """
    Shell-like argument splitting.

    - whitespace separates words
    - '...' is taken verbatim
    - "..." honours backslash escapes
    - a backslash outside quotes escapes the next character
    """
    words: List[str] = []
    buf: List[str] = []
    in_word = False
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]
        if ch.isspace():
            if in_word:
                words.append("".join(buf))
                buf = []
                in_word = False
            i += 1
            continue

        in_word = True
        if ch == "'":
            close = text.find("'", i + 1)
            if close < 0:
                raise MalformedArgumentsError(text, source, line_index=line_index)
            buf.append(text[i + 1:close])
            i = close + 1
        elif ch == '"':
            i += 1
            while True:
                if i >= n:
                    raise MalformedArgumentsError(text, source, line_index=line_index)
                c = text[i]
                if c == "\\" and i + 1 < n:
                    buf.append(text[i + 1])
                    i += 2
                elif c == '"':
                    i += 1
                    break
                else:
                    buf.append(c)
                    i += 1
        elif ch == "\\" and i + 1 < n:
            buf.append(text[i + 1])
            i += 2
        else:
            buf.append(ch)
            i += 1

    if in_word:
        words.append("".join(buf))
    return words


class DirectiveParser:
    """Splits source into header/body and extracts directives from the header."""

    def __init__(self, source: Optional[Path] = None):
        self.source = source

    def parse(self, text: str) -> ParsedSource:
        header, body = split_header(text)
        directives: List[Directive] = []
        for i, line in enumerate(header.splitlines()):
            m = _DIRECTIVE_RE.match(line)
            if not m:
                continue
            argv = split_arguments(m.group(1), self.source, i)
            if not argv:
                continue
            directives.append(Directive(line_index=i, name=argv[0], args=tuple(argv[1:])))
        return ParsedSource(header=header, body=body, directives=directives)


class DirectiveRegistry:
    """Name -> handler(context, *args)."""

    def __init__(self):
        self._handlers: Dict[str, DirectiveHandler] = {}

    def register(self, name: str, handler: DirectiveHandler) -> "DirectiveRegistry":
        if not callable(handler):
            raise TypeError(f"Directive handler for '{name}' must be callable")
        self._handlers[name] = handler
        return self

    def is_registered(self, name: str) -> bool:
        return name in self._handlers

    def names(self) -> List[str]:
        return sorted(self._handlers)

    def execute(self, directive: Directive, context: "BuildSession", source: Optional[Path]) -> Any:
        handler = self._handlers.get(directive.name)
        if handler is None:
            raise UndefinedDirectiveError(directive.name, source)
        try:
            inspect.signature(handler).bind(context, *directive.args)
        except TypeError as e:
            raise MalformedArgumentsError(
                " ".join((directive.name, *directive.args)),
                source,
                reason=f"Bad arguments ({e})",
                line_index=directive.line_index,
            ) from e
        logger.debug(f"{source}: {directive.name} {' '.join(directive.args)}")
        return handler(context, *directive.args)


def default_directives() -> DirectiveRegistry:
    reg = DirectiveRegistry()
    reg.register("require", lambda ctx, path: ctx.require_asset(path))
    reg.register("depend_on", lambda ctx, path: ctx.depend_on(path))
    reg.register("require_tree", lambda ctx, path: ctx.require_tree(path))
    return reg


class DirectiveProcessor(Processor):
    """
    Runs header directives against the build session and strips them.

    The registry comes from the "directives" option, else from the
    session's manager.
    """

    name = "directives"

    def render(self, context=None, variables=None) -> str:
        parsed = DirectiveParser(self.source).parse(self.get_data())
        if parsed.directives:
            registry = self._registry(context)
            for directive in parsed.directives:
                registry.execute(directive, context, self.source)
        return parsed.processed_source()

    def _registry(self, context) -> DirectiveRegistry:
        registry = self.option("directives")
        if registry is None and context is not None:
            registry = context.manager.directives
        if registry is None:
            registry = default_directives()
        return registry


__all__ = [
    "Directive", "ParsedSource", "DirectiveParser", "DirectiveRegistry",
    "DirectiveProcessor", "default_directives", "split_arguments",
]
