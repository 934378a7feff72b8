"""Base pattern class for tree pattern matching.

All patterns inherit from :class:`BasePat`.  The ``check()`` method is the
main entry point; subclasses decorate it with ``@BasePat.base_check``,
which handles ``check_kind`` validation, ``bind_name`` storage, and debug
output.
"""
from __future__ import annotations

import traceback

from ifcollapse.core import typing
from ifcollapse.core import getLogger
from ifcollapse.tree.match_context import MatchContext
from ifcollapse.tree.nodes import NodeKind

logger = getLogger("IfCollapse.tree")


class BasePat:
    """Base class for all tree patterns."""

    kind: NodeKind | None = None

    def __init__(
        self,
        bind_name: str | None = None,
        debug: bool = False,
        debug_msg: str | None = None,
        debug_trace_depth: int = 0,
        check_kind: NodeKind | None = None,
    ) -> None:
        """
        :param bind_name: capture the matched node under this name
        :param debug: log the outcome of every check at DEBUG
        :param debug_msg: additional message to log on debug
        :param debug_trace_depth: number of stack frames to log on debug
        :param check_kind: node kind to require. skips this check if None
        """
        self.bind_name = bind_name
        self.check_kind = check_kind
        self.debug = debug
        self.debug_msg = debug_msg
        self.debug_trace_depth = debug_trace_depth

    def check(self, item: typing.Any, ctx: MatchContext) -> bool:
        """Base matching operation.

        :param item: tree node
        :param ctx: matching context
        """
        raise NotImplementedError("This is an abstract class")

    def bind(self, name: str) -> "BasePat":
        """Set the capture name and return ``self`` (``pat#name``)."""
        self.bind_name = name
        return self

    def __or__(self, other: "BasePat") -> "BasePat":
        from ifcollapse.tree.patterns.abstracts import OrPat

        return OrPat(self, other)

    @classmethod
    def get_kindname(cls) -> str | None:
        """Return the human-readable name of this pattern's node kind."""
        return cls.kind.value if cls.kind is not None else None

    @staticmethod
    def base_check(func: typing.Callable) -> typing.Callable:
        """Decorator for child classes instead of inheritance, since
        before and after calls are needed.
        """

        def __perform_base_check(self: BasePat, item: typing.Any, ctx: MatchContext) -> bool:
            if item is None:
                return False

            if self.check_kind is not None and item.kind is not self.check_kind:
                return False

            rv: bool = func(self, item, ctx)

            if rv and self.bind_name is not None:
                rv = ctx.bind_item(self.bind_name, item)

            if self.debug:
                if self.debug_msg:
                    logger.debug("Debug: value = %s, %s", rv, self.debug_msg)
                else:
                    logger.debug("Debug: value = %s", rv)

                if self.debug_trace_depth != 0:
                    logger.debug("Debug calltrace, item: %r", item)
                    logger.debug("---------------------------------")
                    for line in traceback.format_stack()[: self.debug_trace_depth]:
                        logger.debug(line.rstrip())
                    logger.debug("---------------------------------")
            return rv

        return __perform_base_check

    @property
    def children(self) -> tuple:
        """Return child patterns. Must be overridden by subclasses."""
        raise NotImplementedError("An abstract class doesn't have any children")
