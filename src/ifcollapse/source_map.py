"""Source text access for spans.

:class:`SourceMap` is the snippet accessor lints use to turn spans back
into text.  Exact text is only promised for spans written by hand; macro
spans and spans outside the file degrade the applicability of whatever
suggestion is built from them.
"""
from __future__ import annotations

import bisect

from ifcollapse.core import getLogger
from ifcollapse.diagnostics import Applicability
from ifcollapse.tree.span import Span

logger = getLogger("IfCollapse")


def trim_multiline(text: str, ignore_first: bool = True) -> str:
    """Strip the indentation shared by the lines of *text*.

    The first line usually starts mid-line in the original file, so by
    default it takes no part in computing the common indentation.
    """
    lines = text.split("\n")
    candidates = lines[1:] if ignore_first else lines
    indents = [len(line) - len(line.lstrip()) for line in candidates if line.strip()]
    if not indents:
        return text
    strip = min(indents)
    if strip == 0:
        return text
    out = []
    for idx, line in enumerate(lines):
        if idx == 0 and ignore_first:
            out.append(line)
        elif line.strip():
            out.append(line[strip:])
        else:
            out.append(line.lstrip())
    return "\n".join(out)


class SourceMap:
    """Verbatim source text of one file, addressed by span."""

    def __init__(self, text: str, filename: str = "<input>") -> None:
        self.text = text
        self.filename = filename
        self._line_starts: list[int] = [0]
        for idx, ch in enumerate(text):
            if ch == "\n":
                self._line_starts.append(idx + 1)

    def snippet_opt(self, span: Span) -> str | None:
        """Return the exact text under *span*, or ``None`` if it cannot be recovered."""
        if span.lo < 0 or span.hi > len(self.text) or span.lo > span.hi:
            logger.debug("Span %r is outside of %s", span, self.filename)
            return None
        return self.text[span.lo : span.hi]

    def snippet(self, span: Span, default: str) -> str:
        text = self.snippet_opt(span)
        return default if text is None else text

    def snippet_block(self, span: Span, default: str) -> str:
        """Like :meth:`snippet`, with continuation lines re-indented."""
        return trim_multiline(self.snippet(span, default))

    def snippet_with_applicability(
        self, span: Span, default: str, applicability: Applicability
    ) -> tuple[str, Applicability]:
        """Return the text under *span* and *applicability*, degraded as needed.

        A macro-generated span gives ``MaybeIncorrect`` text (it may not be
        what the author wrote); an unrecoverable span gives *default* and
        ``Unspecified``.
        """
        if span.from_expansion:
            applicability = applicability.degrade(Applicability.MaybeIncorrect)
        text = self.snippet_opt(span)
        if text is None:
            return default, applicability.degrade(Applicability.Unspecified)
        return text, applicability

    def snippet_block_with_applicability(
        self, span: Span, default: str, applicability: Applicability
    ) -> tuple[str, Applicability]:
        text, applicability = self.snippet_with_applicability(span, default, applicability)
        return trim_multiline(text), applicability

    def lookup_line_col(self, pos: int) -> tuple[int, int]:
        """Return the 1-based (line, column) of byte offset *pos*."""
        line = bisect.bisect_right(self._line_starts, pos) - 1
        return line + 1, pos - self._line_starts[line] + 1

    def __repr__(self) -> str:
        return f"SourceMap({self.filename!r}, {len(self.text)} bytes)"
