"""Abstract combinator patterns for tree matching.

Provides ``AnyPat`` (``_``), ``NonePat`` (``()``), ``OptPat`` (``X?``),
``OrPat`` (``A | B``) and ``AndPat``, which combine sub-patterns or match
without looking at the node's shape.
"""
from __future__ import annotations

from ifcollapse.core import typing
from ifcollapse.core import getLogger
from ifcollapse.tree.patterns.base_pattern import BasePat
from ifcollapse.tree.match_context import MatchContext

logger = getLogger("IfCollapse.tree")


class AnyPat(BasePat):
    """Matches anything, binding it when named."""

    def __init__(self, may_be_none: bool = True, **kwargs: typing.Any) -> None:
        """
        :param may_be_none: accept a missing (None) item
        """
        super().__init__(**kwargs)
        self.may_be_none = may_be_none

    def check(self, item: typing.Any, ctx: MatchContext) -> bool:
        rv = item is not None or self.may_be_none
        if rv and item is not None and self.bind_name is not None:
            rv = ctx.bind_item(self.bind_name, item)
        return rv

    @property
    def children(self) -> tuple:
        return ()


class NonePat(BasePat):
    """Pattern for an absent child, e.g. an ``if`` without ``else``."""

    def check(self, item: typing.Any, ctx: MatchContext) -> bool:
        return item is None

    @property
    def children(self) -> tuple:
        return ()


class OptPat(BasePat):
    """Zero-or-one: matches an absent child, or a present one matching ``pat``."""

    def __init__(self, pat: BasePat, **kwargs: typing.Any) -> None:
        super().__init__(**kwargs)
        self.pat = pat

    def check(self, item: typing.Any, ctx: MatchContext) -> bool:
        if item is None:
            return True
        rv = self.pat.check(item, ctx)
        if rv and self.bind_name is not None:
            rv = ctx.bind_item(self.bind_name, item)
        return rv

    @property
    def children(self) -> tuple[BasePat]:
        return (self.pat,)


class OrPat(BasePat):
    """Ordered alternation: the first sub-pattern that matches wins.

    Later alternatives are never tried once one succeeds.  Captures made
    by a failed alternative are rolled back before the next one runs.
    """

    def __init__(self, *pats: BasePat, **kwargs: typing.Any) -> None:
        super().__init__(**kwargs)
        if len(pats) <= 1:
            logger.warning("OrPat built from fewer than two alternatives")
        flat: list[BasePat] = []
        for p in pats:
            # (A | B) | C is A | B | C unless the inner one captures
            if type(p) is OrPat and p.bind_name is None:
                flat.extend(p.pats)
            else:
                flat.append(p)
        self.pats: tuple[BasePat, ...] = tuple(flat)

    @BasePat.base_check
    def check(self, item: typing.Any, ctx: MatchContext) -> bool:
        for p in self.pats:
            saved = ctx.snapshot()
            if p.check(item, ctx):
                return True
            ctx.restore(saved)
        return False

    @property
    def children(self) -> tuple[BasePat, ...]:
        return self.pats


class AndPat(BasePat):
    """Matches when every sub-pattern matches the same item."""

    def __init__(self, *pats: BasePat, **kwargs: typing.Any) -> None:
        super().__init__(**kwargs)
        if len(pats) <= 1:
            logger.warning("AndPat built from fewer than two sub-patterns")
        self.pats: tuple[BasePat, ...] = tuple(pats)

    @BasePat.base_check
    def check(self, item: typing.Any, ctx: MatchContext) -> bool:
        for p in self.pats:
            if not p.check(item, ctx):
                return False
        return True

    @property
    def children(self) -> tuple[BasePat, ...]:
        return self.pats
