"""Scheme: pairs patterns with a handler callback.

When a pattern matches a tree node, the handler is invoked with the match
context and returns a result (for lint passes, a ``Diagnostic``) or
``None`` to drop the match.
"""
from __future__ import annotations

from enum import Enum

from ifcollapse.core import typing
from ifcollapse.core import getLogger
from ifcollapse.tree.match_context import MatchContext
from ifcollapse.tree.patterns.base_pattern import BasePat

logger = getLogger("IfCollapse.tree")


class Scheme:
    """Pairs patterns with a handler for tree matching."""

    class SchemeType(Enum):
        GENERIC = 0
        READONLY = 1

    def __init__(
        self,
        *patterns: BasePat,
        scheme_type: "Scheme.SchemeType" = SchemeType.READONLY,
    ) -> None:
        """
        :param patterns: tree patterns to match.
        :param scheme_type:
            ``GENERIC`` -- stop at the first pattern whose handler returns a result,
            ``READONLY`` -- try every pattern and keep every result.
        """
        self.patterns: tuple[BasePat, ...] = patterns
        self.stype: Scheme.SchemeType = scheme_type

    def accepts(self, item: typing.Any) -> bool:
        """Pre-filter run before any pattern is tried.

        Override to skip nodes outright (e.g. macro-generated code).
        """
        return True

    def on_matched_item(self, item: typing.Any, ctx: MatchContext) -> typing.Any | None:
        """Callback for successful match.

        Override in subclasses to turn a match into a result.

        :param item: matched tree node.
        :param ctx: matching context with captures; ``ctx.pattern`` tells
                    which of ``self.patterns`` matched.
        :return: a result, or ``None`` to discard the match.
        """
        return None

    def on_tree_iteration_start(self) -> None:
        """Called at the start of tree iteration."""
        return

    def on_tree_iteration_end(self) -> None:
        """Called at the end of tree iteration."""
        return
