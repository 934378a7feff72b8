"""Diagnostics and suggestions produced by lint passes.

A lint never writes anything itself: it hands a :class:`Diagnostic` to a
:class:`DiagnosticSink`, and the sink decides how to render or apply it.
"""
from __future__ import annotations

import dataclasses
import enum

from ifcollapse.core import typing
from ifcollapse.core import getLogger
from ifcollapse.tree.span import Span

if typing.TYPE_CHECKING:
    from ifcollapse.lints.base import Lint
    from ifcollapse.source_map import SourceMap

logger = getLogger("IfCollapse")


class Applicability(enum.Enum):
    """How safe it is to apply a suggestion without a human looking at it."""

    MachineApplicable = 2
    MaybeIncorrect = 1
    Unspecified = 0

    def degrade(self, other: "Applicability") -> "Applicability":
        """Return the less confident of ``self`` and *other*."""
        return self if self.value <= other.value else other

    @property
    def is_machine_applicable(self) -> bool:
        return self is Applicability.MachineApplicable


@dataclasses.dataclass(frozen=True)
class Suggestion:
    """Replace the source under ``span`` with ``replacement``."""

    span: Span
    replacement: str
    applicability: Applicability
    message: str = "try"

    def apply(self, text: str) -> str:
        """Return *text* with the suggestion applied."""
        return text[: self.span.lo] + self.replacement + text[self.span.hi :]


@dataclasses.dataclass(frozen=True)
class Diagnostic:
    lint: "Lint"
    span: Span
    message: str
    suggestion: Suggestion | None = None

    def render(self, source_map: "SourceMap | None" = None) -> str:
        """One-line human summary, e.g. ``lib.rs:3:5: warning: ... [collapsible_if]``."""
        location = f"{self.span.lo}..{self.span.hi}"
        if source_map is not None:
            line, col = source_map.lookup_line_col(self.span.lo)
            location = f"{source_map.filename}:{line}:{col}"
        text = f"{location}: {self.lint.level.value}: {self.message} [{self.lint.name}]"
        if self.suggestion is not None:
            text += f"\n  {self.suggestion.message}: `{self.suggestion.replacement}`"
            if not self.suggestion.applicability.is_machine_applicable:
                text += f" ({self.suggestion.applicability.name})"
        return text


@typing.runtime_checkable
class DiagnosticSink(typing.Protocol):
    def emit(self, diagnostic: Diagnostic) -> None: ...


class DiagnosticCollector:
    """Sink that keeps every diagnostic in emission order."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def emit(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def __len__(self) -> int:
        return len(self.diagnostics)

    def __iter__(self) -> typing.Iterator[Diagnostic]:
        return iter(self.diagnostics)

    def suggestions(self) -> list[Suggestion]:
        return [d.suggestion for d in self.diagnostics if d.suggestion is not None]


class LoggingSink:
    """Sink that writes rendered diagnostics to a logger."""

    def __init__(
        self,
        source_map: "SourceMap | None" = None,
        log: typing.Any = None,
    ) -> None:
        self.source_map = source_map
        self.log = log or getLogger("IfCollapse.driver")

    def emit(self, diagnostic: Diagnostic) -> None:
        self.log.warning("%s", diagnostic.render(self.source_map))
