"""Expression patterns for tree matching.

``IfPat`` and ``IfLetPat`` match the two conditional forms; ``KindPat``
matches any node of a given kind.  Every child slot left as ``None`` is a
wildcard that also accepts an absent child.
"""
from __future__ import annotations

from ifcollapse.core import typing
from ifcollapse.core import getLogger
from ifcollapse.tree.nodes import NodeKind
from ifcollapse.tree.patterns.abstracts import AnyPat, NonePat
from ifcollapse.tree.patterns.base_pattern import BasePat
from ifcollapse.tree.match_context import MatchContext

logger = getLogger("IfCollapse.tree")


class ExpressionPat(BasePat):
    """Base class for expression patterns."""

    def __init__(self, **kwargs: typing.Any) -> None:
        super().__init__(check_kind=self.kind, **kwargs)


class KindPat(BasePat):
    """Pattern for any node of the given kind."""

    def __init__(self, kind: NodeKind, **kwargs: typing.Any) -> None:
        super().__init__(check_kind=kind, **kwargs)

    @BasePat.base_check
    def check(self, item: typing.Any, ctx: MatchContext) -> bool:
        return True

    @property
    def children(self) -> tuple:
        return ()


class IfPat(ExpressionPat):
    """Pattern for ``if cond { then } else els``."""

    kind = NodeKind.IF

    def __init__(
        self,
        condition: BasePat | None = None,
        then_branch: BasePat | None = None,
        else_branch: BasePat | None = None,
        no_else: bool = False,
        **kwargs: typing.Any,
    ) -> None:
        """
        :param condition: if condition
        :param then_branch: then block
        :param else_branch: else block or nested conditional
        :param no_else: shorthand for ``else_branch=NonePat()``
        """
        super().__init__(**kwargs)
        self.condition: BasePat = condition or AnyPat()
        self.then_branch: BasePat = then_branch or AnyPat()
        self.else_branch: BasePat = NonePat() if no_else else (else_branch or AnyPat())

    @BasePat.base_check
    def check(self, expression: typing.Any, ctx: MatchContext) -> bool:
        return (
            self.condition.check(expression.cond, ctx)
            and self.then_branch.check(expression.then, ctx)
            and self.else_branch.check(expression.els, ctx)
        )

    @property
    def children(self) -> tuple[BasePat, BasePat, BasePat]:
        return (self.condition, self.then_branch, self.else_branch)


class IfLetPat(ExpressionPat):
    """Pattern for ``if let pat = scrutinee { then } else els``."""

    kind = NodeKind.IF_LET

    def __init__(
        self,
        pat: BasePat | None = None,
        scrutinee: BasePat | None = None,
        then_branch: BasePat | None = None,
        else_branch: BasePat | None = None,
        no_else: bool = False,
        **kwargs: typing.Any,
    ) -> None:
        super().__init__(**kwargs)
        self.pat: BasePat = pat or AnyPat()
        self.scrutinee: BasePat = scrutinee or AnyPat()
        self.then_branch: BasePat = then_branch or AnyPat()
        self.else_branch: BasePat = NonePat() if no_else else (else_branch or AnyPat())

    @BasePat.base_check
    def check(self, expression: typing.Any, ctx: MatchContext) -> bool:
        return (
            self.pat.check(expression.pat, ctx)
            and self.scrutinee.check(expression.scrutinee, ctx)
            and self.then_branch.check(expression.then, ctx)
            and self.else_branch.check(expression.els, ctx)
        )

    @property
    def children(self) -> tuple[BasePat, ...]:
        return (self.pat, self.scrutinee, self.then_branch, self.else_branch)
