"""
Placeholder-based message rendering.

Templates use ``{}`` for the next positional value and ``{{`` for a literal
``{``. Rendering writes into a ``RenderContext`` so that the frame prefix
(color, name, timestamp, level tag) is emitted exactly once per message, no
matter how many segments the template is split into.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from .diagnostics import report
from .exceptions import ArgumentCountError, UnprintableArgumentError
from .levels import RESET


@dataclass
class RenderContext:
    """Framing state of one logical message.

    Attributes:
        prefix: Text emitted before the first segment.
        is_colored: An unterminated color escape is pending.
        is_first_segment: The prefix has not been emitted yet.
    """

    prefix: str = ""
    is_colored: bool = False
    is_first_segment: bool = True
    parts: List[str] = field(default_factory=list)

    def append(self, text: str) -> None:
        if self.is_first_segment:
            self.parts.append(self.prefix)
            self.is_first_segment = False
        self.parts.append(text)

    def finish(self) -> str:
        """Close the frame and return the composed text, resetting the context."""
        if self.is_first_segment:
            self.append("")
        if self.is_colored:
            self.parts.append(RESET)
            self.is_colored = False
        text = "".join(self.parts)
        self.parts.clear()
        self.is_first_segment = True
        return text

    @property
    def text(self) -> str:
        return "".join(self.parts)


def to_text(value: Any) -> str:
    """``str(value)``, or an ``<unprintable Type>`` marker when conversion fails."""
    try:
        return str(value)
    except Exception as exc:
        type_name = type(value).__name__
        report(UnprintableArgumentError(type_name=type_name, reason=repr(exc)))
        return f"<unprintable {type_name}>"


def render(template: str, args: Sequence[Any], ctx: Optional[RenderContext] = None) -> RenderContext:
    """
    Render ``template`` against ``args`` into ``ctx``.

    Raises:
        ArgumentCountError: after rendering as much as possible. With too many
            values the whole template is in the context; with too few, the
            text stops right before the first unmatched placeholder.
    """
    if ctx is None:
        ctx = RenderContext()

    if not args:
        ctx.append(template.replace("{{", "{"))
        return ctx

    consumed = 0
    segment_start = 0
    i = 0
    length = len(template)
    while i < length:
        if template[i] != "{" or i + 1 >= length:
            i += 1
            continue
        following = template[i + 1]
        if following == "{":
            ctx.append(template[segment_start:i] + "{")
            i += 2
            segment_start = i
        elif following == "}":
            ctx.append(template[segment_start:i])
            if consumed >= len(args):
                raise ArgumentCountError.too_few(template=template, given=len(args))
            ctx.append(to_text(args[consumed]))
            consumed += 1
            i += 2
            segment_start = i
        else:
            i += 1

    ctx.append(template[segment_start:])
    if consumed < len(args):
        raise ArgumentCountError.too_many(
            template=template,
            surplus=to_text(args[consumed]),
            surplus_count=len(args) - consumed,
        )
    return ctx


def format_message(template: str, *args: Any) -> str:
    """Render to a plain string; mismatches are reported, never raised."""
    ctx = RenderContext()
    try:
        render(template, args, ctx)
    except ArgumentCountError as exc:
        report(exc)
    return ctx.finish()
