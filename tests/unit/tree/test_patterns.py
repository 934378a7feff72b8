"""Unit tests for the ifcollapse.tree pattern DSL.

Tests BasePat, AnyPat, NonePat, OptPat, OrPat, AndPat, KindPat, IfPat,
IfLetPat, BlockPat, ExprStmtPat, SemiStmtPat and the base_check decorator.
"""
from __future__ import annotations

import pytest

from ifcollapse.tree.match_context import MatchContext
from ifcollapse.tree.matcher import match_pattern
from ifcollapse.tree.nodes import NodeKind
from ifcollapse.tree.patterns import (
    AndPat,
    AnyPat,
    BasePat,
    BlockPat,
    ExprStmtPat,
    IfLetPat,
    IfPat,
    KindPat,
    NonePat,
    OptPat,
    OrPat,
    SemiStmtPat,
)


def make_ctx() -> MatchContext:
    return MatchContext(pattern=AnyPat())


# -------------------------------------------------------------------------
# BasePat tests
# -------------------------------------------------------------------------
class TestBasePat:
    def test_abstract_check_raises(self, reader):
        pat = BasePat()
        with pytest.raises(NotImplementedError):
            pat.check(reader.read("x;").first_expr(), make_ctx())

    def test_abstract_children_raises(self):
        with pytest.raises(NotImplementedError):
            _ = BasePat().children

    def test_get_kindname(self):
        assert BasePat.get_kindname() is None
        assert IfPat.get_kindname() == "if"

    def test_bind_returns_self(self):
        pat = AnyPat()
        assert pat.bind("x") is pat
        assert pat.bind_name == "x"

    def test_or_operator_builds_orpat(self):
        combined = IfPat() | IfLetPat()
        assert isinstance(combined, OrPat)
        assert len(combined.pats) == 2


class TestBaseCheck:
    def test_none_is_rejected(self):
        assert not KindPat(NodeKind.PATH).check(None, make_ctx())

    def test_kind_mismatch_is_rejected(self, reader):
        item = reader.read("x;").first_expr()
        assert not KindPat(NodeKind.LIT).check(item, make_ctx())

    def test_bind_on_success(self, reader):
        item = reader.read("x;").first_expr()
        ctx = make_ctx()
        assert KindPat(NodeKind.PATH, bind_name="p").check(item, ctx)
        assert ctx.get_item("p") is item

    def test_no_bind_on_failure(self, reader):
        item = reader.read("x;").first_expr()
        ctx = make_ctx()
        assert not KindPat(NodeKind.LIT, bind_name="p").check(item, ctx)
        assert not ctx.has_item("p")

    def test_debug_logging(self, reader, caplog):
        item = reader.read("x;").first_expr()
        pat = KindPat(NodeKind.PATH, debug=True, debug_msg="path?", debug_trace_depth=2)
        with caplog.at_level("DEBUG", logger="IfCollapse.tree"):
            assert pat.check(item, make_ctx())
        assert "path?" in caplog.text


# -------------------------------------------------------------------------
# Combinators
# -------------------------------------------------------------------------
class TestAnyNoneOpt:
    def test_any_accepts_none_by_default(self):
        assert AnyPat().check(None, make_ctx())
        assert not AnyPat(may_be_none=False).check(None, make_ctx())

    def test_any_binds_present_items_only(self, reader):
        item = reader.read("x;").first_expr()
        ctx = make_ctx()
        assert AnyPat(bind_name="a").check(None, ctx)
        assert not ctx.has_item("a")
        assert AnyPat(bind_name="a").check(item, ctx)
        assert ctx.get_item("a") is item

    def test_none_pat(self, reader):
        assert NonePat().check(None, make_ctx())
        assert not NonePat().check(reader.read("x;").first_expr(), make_ctx())

    def test_opt_pat(self, reader):
        path = reader.read("x;").first_expr()
        lit = reader.read("1;").first_expr()
        opt = OptPat(KindPat(NodeKind.PATH))
        assert opt.check(None, make_ctx())
        assert opt.check(path, make_ctx())
        assert not opt.check(lit, make_ctx())


class TestOrPat:
    def test_first_match_wins(self, reader):
        item = reader.read("x;").first_expr()
        ctx = make_ctx()
        pat = OrPat(AnyPat(bind_name="first"), AnyPat(bind_name="second"))
        assert pat.check(item, ctx)
        assert ctx.has_item("first")
        assert not ctx.has_item("second")

    def test_failed_alternative_is_rolled_back(self, reader):
        outer = reader.read("if x { y(); }").first_expr()
        ctx = make_ctx()
        # the first branch binds `cond` then fails on the else slot
        pat = OrPat(
            IfPat(AnyPat(bind_name="cond"), else_branch=KindPat(NodeKind.BLOCK)),
            IfPat(no_else=True, bind_name="plain"),
        )
        assert pat.check(outer, ctx)
        assert ctx.has_item("plain")
        assert not ctx.has_item("cond")

    def test_all_alternatives_fail(self, reader):
        item = reader.read("x;").first_expr()
        ctx = make_ctx()
        assert not OrPat(IfPat(), IfLetPat(), bind_name="c").check(item, ctx)
        assert not ctx.has_item("c")

    def test_unbound_nested_orpats_are_flattened(self):
        a, b, c = IfPat(), IfLetPat(), KindPat(NodeKind.LIT)
        assert OrPat(OrPat(a, b), c).pats == (a, b, c)
        bound = OrPat(a, b, bind_name="x")
        assert OrPat(bound, c).pats == (bound, c)


class TestAndPat:
    def test_all_must_match(self, reader):
        item = reader.read("x;").first_expr()
        assert AndPat(KindPat(NodeKind.PATH), AnyPat()).check(item, make_ctx())
        assert not AndPat(KindPat(NodeKind.PATH), KindPat(NodeKind.LIT)).check(item, make_ctx())


# -------------------------------------------------------------------------
# Node patterns
# -------------------------------------------------------------------------
class TestConditionalPats:
    def test_if_pat_children(self, reader):
        outer = reader.read("if a { b(); } else { c(); }").first_expr()
        result = match_pattern(
            IfPat(
                AnyPat(bind_name="cond"),
                AnyPat(bind_name="then"),
                AnyPat(bind_name="els"),
            ),
            outer,
        )
        assert result is not None
        assert result.cond is outer.cond
        assert result.then is outer.then
        assert result.els is outer.els

    def test_no_else(self, reader):
        with_else = reader.read("if a { } else { }").first_expr()
        without_else = reader.read("if a { }").first_expr()
        assert match_pattern(IfPat(no_else=True), without_else) is not None
        assert match_pattern(IfPat(no_else=True), with_else) is None

    def test_if_pat_rejects_if_let(self, reader):
        if_let = reader.read("if let Some(x) = y { }").first_expr()
        assert match_pattern(IfPat(), if_let) is None
        assert match_pattern(IfLetPat(bind_name="il"), if_let) is not None

    def test_if_let_pat_children(self, reader):
        if_let = reader.read("if let Some(x) = y { }").first_expr()
        result = match_pattern(
            IfLetPat(AnyPat(bind_name="pat"), AnyPat(bind_name="scrutinee"), no_else=True),
            if_let,
        )
        assert result.pat is if_let.pat
        assert result.scrutinee is if_let.scrutinee


class TestBlockPats:
    def test_block_requires_exact_length(self, reader):
        one = reader.read("if a { b(); }").first_expr().then
        two = reader.read("if a { b(); c(); }").first_expr().then
        pat = BlockPat(SemiStmtPat())
        assert match_pattern(pat, one) is not None
        assert match_pattern(pat, two) is None
        assert match_pattern(BlockPat(), reader.read("if a { }").first_expr().then) is not None

    def test_expr_vs_semi_statements(self, reader):
        semi = reader.read("if a { b(); }").first_expr().then.stmts[0]
        expr = reader.read("if a { b() }").first_expr().then.stmts[0]
        assert match_pattern(SemiStmtPat(), semi) is not None
        assert match_pattern(SemiStmtPat(), expr) is None
        assert match_pattern(ExprStmtPat(), expr) is not None
        assert match_pattern(ExprStmtPat(), semi) is None

    def test_statement_pattern_sees_inner_expression(self, reader):
        stmt = reader.read("if a { if b { } }").first_expr().then.stmts[0]
        result = match_pattern(ExprStmtPat(IfPat(bind_name="inner")), stmt)
        assert result.inner is stmt.node

    def test_let_statement_is_not_an_expression_statement(self, reader):
        block = reader.read("if a { let x = 1; }").first_expr().then
        assert match_pattern(BlockPat(ExprStmtPat() | SemiStmtPat()), block) is None
