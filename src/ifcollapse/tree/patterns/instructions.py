"""Statement patterns for tree matching.

Contains patterns for blocks and the statements inside them:
``BlockPat``, ``ExprStmtPat`` (trailing expression) and ``SemiStmtPat``
(expression terminated by ``;``).
"""
from __future__ import annotations

from ifcollapse.core import typing
from ifcollapse.core import getLogger
from ifcollapse.tree.nodes import NodeKind, StmtKind
from ifcollapse.tree.patterns.abstracts import AnyPat
from ifcollapse.tree.patterns.base_pattern import BasePat
from ifcollapse.tree.match_context import MatchContext

logger = getLogger("IfCollapse.tree")


class StatementPat(BasePat):
    """Base pattern for block and statement patterns."""

    def __init__(self, **kwargs: typing.Any) -> None:
        super().__init__(check_kind=self.kind, **kwargs)


class BlockPat(StatementPat):
    """Pattern for a block (curly braces) with exactly ``len(patterns)`` statements."""

    kind = NodeKind.BLOCK

    def __init__(self, *patterns: BasePat, **kwargs: typing.Any) -> None:
        super().__init__(**kwargs)
        self.sequence: tuple[BasePat, ...] = patterns

    @BasePat.base_check
    def check(self, block: typing.Any, ctx: MatchContext) -> bool:
        if len(block.stmts) != len(self.sequence):
            return False
        for stmt, pat in zip(block.stmts, self.sequence):
            if not pat.check(stmt, ctx):
                return False
        return True

    @property
    def children(self) -> tuple:
        return (self.sequence,)


class _ExprStmtBase(StatementPat):
    kind = NodeKind.STMT
    stmt_kind: StmtKind

    def __init__(self, expr: BasePat | None = None, **kwargs: typing.Any) -> None:
        super().__init__(**kwargs)
        self.expr: BasePat = expr or AnyPat()

    @BasePat.base_check
    def check(self, stmt: typing.Any, ctx: MatchContext) -> bool:
        if stmt.stmt_kind is not self.stmt_kind:
            return False
        return self.expr.check(stmt.node, ctx)

    @property
    def children(self) -> tuple[BasePat]:
        return (self.expr,)


class ExprStmtPat(_ExprStmtBase):
    """Pattern for a trailing expression statement (no ``;``)."""

    stmt_kind = StmtKind.EXPR


class SemiStmtPat(_ExprStmtBase):
    """Pattern for an expression statement terminated by ``;``."""

    stmt_kind = StmtKind.SEMI
