from __future__ import annotations

import dataclasses
import json
from collections import defaultdict
from enum import Enum, auto
from typing import Any, Dict

from .logging import getLogger
from .registry import EventEmitter

logger = getLogger("IfCollapse")


class LintEvent(Enum):
    """Events emitted while linting, for instrumentation/testing."""

    CANDIDATE = auto()  # A node was offered to a lint pass
    MATCH = auto()  # A pattern matched structurally
    GUARD_REJECTED = auto()  # A structural match was discarded by a guard
    DIAGNOSTIC = auto()  # A diagnostic (with suggestion) was emitted
    FAILED = auto()  # A pass raised while checking a node

    SESSION_START = auto()
    SESSION_END = auto()


@dataclasses.dataclass
class LintStatistics:
    """Per-lint counters for one or more lint sessions.

    Counts how many nodes each lint saw, how many matched a pattern, how
    many matches a guard threw away (keyed by guard name) and how many
    diagnostics came out the other end. Every ``record_*`` call is also
    emitted on ``events`` so tests can subscribe instead of polling.
    """

    candidates: Dict[str, int] = dataclasses.field(
        default_factory=lambda: defaultdict(int)
    )
    matches: Dict[str, int] = dataclasses.field(
        default_factory=lambda: defaultdict(int)
    )
    # lint name -> guard name -> count
    guard_rejections: Dict[str, Dict[str, int]] = dataclasses.field(
        default_factory=lambda: defaultdict(lambda: defaultdict(int))
    )
    diagnostics: Dict[str, int] = dataclasses.field(
        default_factory=lambda: defaultdict(int)
    )
    failures: Dict[str, int] = dataclasses.field(
        default_factory=lambda: defaultdict(int)
    )

    events: EventEmitter[LintEvent] = dataclasses.field(
        default_factory=lambda: EventEmitter[LintEvent]()
    )

    def reset(self) -> None:
        self.candidates.clear()
        self.matches.clear()
        self.guard_rejections.clear()
        self.diagnostics.clear()
        self.failures.clear()
        # Don't clear event handlers - they persist across sessions

    # -------------------------------------------------------------------------
    # Recording APIs
    # -------------------------------------------------------------------------

    def record_candidate(self, lint_name: str) -> None:
        self.candidates[lint_name] += 1
        self.events.emit(LintEvent.CANDIDATE, lint_name)

    def record_match(self, lint_name: str) -> None:
        self.matches[lint_name] += 1
        self.events.emit(LintEvent.MATCH, lint_name)

    def record_guard_rejection(self, lint_name: str, guard: str) -> None:
        self.guard_rejections[lint_name][guard] += 1
        self.events.emit(LintEvent.GUARD_REJECTED, lint_name, guard)

    def record_diagnostic(self, lint_name: str) -> None:
        self.diagnostics[lint_name] += 1
        self.events.emit(LintEvent.DIAGNOSTIC, lint_name)

    def record_failure(self, lint_name: str) -> None:
        self.failures[lint_name] += 1
        self.events.emit(LintEvent.FAILED, lint_name)

    # -------------------------------------------------------------------------
    # Query APIs
    # -------------------------------------------------------------------------

    def get_match_count(self, lint_name: str) -> int:
        return self.matches.get(lint_name, 0)

    def get_diagnostic_count(self, lint_name: str) -> int:
        return self.diagnostics.get(lint_name, 0)

    def get_rejection_count(self, lint_name: str, guard: str | None = None) -> int:
        per_guard = self.guard_rejections.get(lint_name, {})
        if guard is None:
            return sum(per_guard.values())
        return per_guard.get(guard, 0)

    def report(self) -> None:
        if not self.candidates:
            logger.info("No lint pass ran")
            return
        for name in sorted(self.candidates):
            logger.info(
                "%s: %d candidates, %d matches, %d rejected, %d diagnostics",
                name,
                self.candidates[name],
                self.matches.get(name, 0),
                self.get_rejection_count(name),
                self.diagnostics.get(name, 0),
            )
            for guard, count in sorted(self.guard_rejections.get(name, {}).items()):
                logger.info("  rejected by %s: %d", guard, count)
            if self.failures.get(name):
                logger.warning("  %s failed on %d nodes", name, self.failures[name])

    def summary(self) -> Dict[str, Any]:
        return {
            "lints": len(self.candidates),
            "total_matches": sum(self.matches.values()),
            "total_rejections": sum(
                sum(per_guard.values()) for per_guard in self.guard_rejections.values()
            ),
            "total_diagnostics": sum(self.diagnostics.values()),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "candidates": dict(self.candidates),
            "matches": dict(self.matches),
            "guard_rejections": {
                name: dict(per_guard)
                for name, per_guard in self.guard_rejections.items()
            },
            "diagnostics": dict(self.diagnostics),
            "failures": dict(self.failures),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LintStatistics":
        stats = cls()
        stats.candidates.update(data.get("candidates", {}))
        stats.matches.update(data.get("matches", {}))
        for name, per_guard in data.get("guard_rejections", {}).items():
            stats.guard_rejections[name].update(per_guard)
        stats.diagnostics.update(data.get("diagnostics", {}))
        stats.failures.update(data.get("failures", {}))
        return stats

    @classmethod
    def from_json(cls, json_str: str) -> "LintStatistics":
        return cls.from_dict(json.loads(json_str))
