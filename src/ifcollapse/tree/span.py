"""Source spans and macro-expansion contexts.

Every tree node carries a :class:`Span`: a byte range into the source text
plus the :class:`SyntaxContext` of the expansion that produced it.  Code
written by hand lives in ``SyntaxContext.ROOT``; every macro invocation
allocates a fresh context, so two spans are hygienically equal exactly
when their contexts are.
"""
from __future__ import annotations

import dataclasses
import itertools
import threading

from ifcollapse.core.typing import ClassVar

_ctxt_lock = threading.Lock()
_ctxt_counter = itertools.count(1)


@dataclasses.dataclass(frozen=True, slots=True)
class SyntaxContext:
    """Opaque expansion identity attached to a span."""

    id: int
    macro_name: str | None = dataclasses.field(default=None, compare=False)

    ROOT: ClassVar["SyntaxContext"]

    @classmethod
    def fresh(cls, macro_name: str | None = None) -> "SyntaxContext":
        """Allocate a context for a new macro expansion."""
        with _ctxt_lock:
            return cls(next(_ctxt_counter), macro_name)

    @property
    def is_root(self) -> bool:
        return self.id == 0

    def __repr__(self) -> str:
        if self.is_root:
            return "#root"
        return f"#{self.id}({self.macro_name or '?'}!)"


SyntaxContext.ROOT = SyntaxContext(0)


@dataclasses.dataclass(frozen=True, slots=True)
class Span:
    """Half-open byte range ``[lo, hi)`` in the source, plus its context."""

    lo: int
    hi: int
    ctxt: SyntaxContext = SyntaxContext.ROOT

    @property
    def from_expansion(self) -> bool:
        """Return True if this span was produced by a macro expansion."""
        return not self.ctxt.is_root

    def to(self, end: "Span") -> "Span":
        """Return a span from the start of ``self`` to the end of *end*."""
        return Span(min(self.lo, end.lo), max(self.hi, end.hi), self.ctxt)

    def with_ctxt(self, ctxt: SyntaxContext) -> "Span":
        return Span(self.lo, self.hi, ctxt)

    def __len__(self) -> int:
        return max(self.hi - self.lo, 0)

    def __repr__(self) -> str:
        return f"Span({self.lo}..{self.hi}{'' if self.ctxt.is_root else ' ' + repr(self.ctxt)})"


DUMMY_SP = Span(0, 0)


def same_context(a: Span, b: Span) -> bool:
    """Return True if *a* and *b* come from the same expansion."""
    return a.ctxt == b.ctxt


def in_macro(span: Span) -> bool:
    """Return True if *span* was produced by a macro expansion."""
    return span.from_expansion
