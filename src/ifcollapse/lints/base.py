"""Lint declarations and the self-registering lint pass base class."""
from __future__ import annotations

import dataclasses
import enum

from ifcollapse.core import typing
from ifcollapse.core import IfCollapseLogger, Registrant, getLogger
from ifcollapse.diagnostics import Diagnostic, Suggestion
from ifcollapse.tree.scheme import Scheme
from ifcollapse.tree.span import Span

if typing.TYPE_CHECKING:
    from ifcollapse.core import LintStatistics

logger = getLogger("IfCollapse.lints")


class Level(enum.Enum):
    ALLOW = "allow"
    WARN = "warning"
    DENY = "error"

    @classmethod
    def parse(cls, name: str) -> "Level":
        """Parse ``allow``/``warn``/``deny`` (as written in configuration)."""
        aliases = {"allow": cls.ALLOW, "warn": cls.WARN, "deny": cls.DENY}
        try:
            return aliases[name.lower()]
        except KeyError:
            raise ValueError(f"Unknown lint level: {name}") from None


@dataclasses.dataclass(frozen=True)
class Lint:
    name: str
    level: Level
    description: str
    group: str = "style"

    def with_level(self, level: Level) -> typing.Self:
        return dataclasses.replace(self, level=level)


class LintPass(Scheme, Registrant):
    """A lint pass: patterns to try on every node, plus the lint it reports.

    Subclasses register themselves under ``registrant_name`` (their class
    name by default) and are looked up case-insensitively through
    ``LintPass.get(...)``.
    """

    lint: typing.ClassVar[Lint]

    def __init__(
        self,
        *patterns: typing.Any,
        level: Level | None = None,
        stats: "LintStatistics | None" = None,
    ) -> None:
        super().__init__(*patterns)
        if level is not None:
            self.lint = self.lint.with_level(level)
        self.stats = stats

    @property
    def name(self) -> str:
        return self.lint.name

    def accepts(self, item: typing.Any) -> bool:
        if not self.is_candidate(item):
            return False
        IfCollapseLogger.update_lint(self.name)
        if self.stats is not None:
            self.stats.record_candidate(self.name)
        return True

    def is_candidate(self, item: typing.Any) -> bool:
        """Return True if the patterns should be tried on *item* at all."""
        return True

    def reject(self, guard: str, item: typing.Any) -> None:
        """Note that *guard* discarded a structural match on *item*."""
        if logger.debug_on:
            logger.debug("%s: %r rejected by %s", self.name, item, guard)
        if self.stats is not None:
            self.stats.record_guard_rejection(self.name, guard)

    def span_lint_and_sugg(
        self,
        span: Span,
        message: str,
        help_message: str,
        replacement: str,
        applicability: typing.Any,
    ) -> Diagnostic:
        """Build the diagnostic for *span* with a single suggestion on it."""
        return Diagnostic(
            lint=self.lint,
            span=span,
            message=message,
            suggestion=Suggestion(span, replacement, applicability, help_message),
        )
