"""Checks for ``if`` expressions that contain only an ``if`` expression.

For example, the lint would catch::

    if x {
        if y {
            println!("Hello world");
        }
    }

which reads better as ``if x && y { ... }``, and::

    if x {
        ...
    } else {
        if y {
            ...
        }
    }

which reads better as ``if x { ... } else if y { ... }``.

Each match collapses exactly one level of nesting.  Nothing is reported
when the block that would disappear starts with a comment (the rewrite
would drop it), or when the two conditions come from different macro
expansions.
"""
from __future__ import annotations

import re

from ifcollapse.core import typing
from ifcollapse.core import getLogger
from ifcollapse.diagnostics import Applicability, Diagnostic
from ifcollapse.lints.base import Level, Lint, LintPass
from ifcollapse.source_map import SourceMap
from ifcollapse.sugg import Sugg
from ifcollapse.tree import nodes
from ifcollapse.tree.match_context import MatchContext, MatchResult
from ifcollapse.tree.nodes import NodeKind
from ifcollapse.tree.patterns import (
    AnyPat,
    BlockPat,
    ExprStmtPat,
    IfLetPat,
    IfPat,
    OptPat,
    OrPat,
    SemiStmtPat,
)
from ifcollapse.tree.span import in_macro, same_context

logger = getLogger("IfCollapse.lints")

COLLAPSIBLE_IF = Lint(
    name="collapsible_if",
    level=Level.WARN,
    description="`if`s that can be collapsed (e.g. `if x { if y { ... } }` and `else { if x { ... } }`)",
)


def _nested_if_without_else() -> IfPat:
    return IfPat(
        AnyPat(bind_name="check_inner"),
        AnyPat(bind_name="content"),
        no_else=True,
        bind_name="inner",
    )


# if check { if check_inner content }
PAT_IF_WITHOUT_ELSE = IfPat(
    AnyPat(bind_name="check"),
    BlockPat(
        ExprStmtPat(_nested_if_without_else()) | SemiStmtPat(_nested_if_without_else()),
        bind_name="then",
    ),
    no_else=True,
)


def _nested_conditional() -> OrPat:
    return OrPat(
        IfPat(else_branch=OptPat(AnyPat())),
        IfLetPat(else_branch=OptPat(AnyPat())),
        bind_name="else_",
    )


def _else_block() -> BlockPat:
    return BlockPat(
        OrPat(
            ExprStmtPat(_nested_conditional()),
            SemiStmtPat(_nested_conditional()),
            bind_name="block_inner",
        ),
        bind_name="block",
    )


# if _ _ else { if .. } | if let _ _ else { if .. }
PAT_IF_ELSE = OrPat(
    IfPat(else_branch=_else_block()),
    IfLetPat(else_branch=_else_block()),
)


# opening braces and whitespace, non-ASCII spaces included
_LEADING_BRACES = re.compile(r"^[\s{]+")


def block_starts_with_comment(source_map: SourceMap, block: nodes.Node) -> bool:
    """Return True if the first thing inside *block* is a comment."""
    trimmed = _LEADING_BRACES.sub("", source_map.snippet_block(block.span, ".."))
    return trimmed.startswith("//") or trimmed.startswith("/*")


class CollapsibleIf(LintPass):
    """Lint pass reporting ``if``s that can be collapsed.

    Both patterns are tried on every candidate; they cannot both match the
    same node since one requires an ``else`` and the other forbids it.
    """

    lint = COLLAPSIBLE_IF

    def __init__(self, **kwargs: typing.Any) -> None:
        super().__init__(PAT_IF_WITHOUT_ELSE, PAT_IF_ELSE, **kwargs)

    @typing.override
    def is_candidate(self, item: typing.Any) -> bool:
        if item.kind not in (NodeKind.IF, NodeKind.IF_LET):
            return False
        return not in_macro(item.span)

    @typing.override
    def on_matched_item(self, item: typing.Any, ctx: MatchContext) -> Diagnostic | None:
        if self.stats is not None:
            self.stats.record_match(self.name)
        result = ctx.result()
        if ctx.pattern is PAT_IF_WITHOUT_ELSE:
            return self.check_collapsible_no_if_let(item, result, ctx.source_map)
        return self.check_collapsible_else_if(item, result, ctx.source_map)

    def check_collapsible_no_if_let(
        self, expr: nodes.If, result: MatchResult, source_map: SourceMap
    ) -> Diagnostic | None:
        if block_starts_with_comment(source_map, result.then):
            self.reject("comment", expr)
            return None
        if not same_context(expr.span, result.inner.span):
            self.reject("hygiene", expr)
            return None

        lhs = Sugg.ast(source_map, result.check, "..")
        rhs = Sugg.ast(source_map, result.check_inner, "..")
        replacement = "if {} {}".format(
            lhs.and_(rhs),
            source_map.snippet_block(result.content.span, ".."),
        )
        return self.span_lint_and_sugg(
            expr.span,
            "this `if` statement can be collapsed",
            "try",
            replacement,
            Applicability.MachineApplicable,
        )

    def check_collapsible_else_if(
        self, expr: nodes.Node, result: MatchResult, source_map: SourceMap
    ) -> Diagnostic | None:
        if block_starts_with_comment(source_map, result.block):
            self.reject("comment", expr)
            return None
        if in_macro(result.else_.span):
            self.reject("hygiene", expr)
            return None

        replacement, applicability = source_map.snippet_block_with_applicability(
            result.else_.span, "..", Applicability.MachineApplicable
        )
        return self.span_lint_and_sugg(
            result.block.span,
            "this `else { if .. }` block can be collapsed",
            "try",
            replacement,
            applicability,
        )
