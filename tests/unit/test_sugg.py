"""Tests for operator-aware expression suggestions."""

import pytest

from ifcollapse.sugg import Sugg, SuggKind, make_binop, needs_paren
from ifcollapse.tree.nodes import Associativity, BinOp


def _cond(reader, source: str) -> Sugg:
    parsed = reader.read(f"if {source} {{ }}")
    return Sugg.ast(parsed.source_map, parsed.first_expr().cond, "..")


class TestNeedsParen:
    def test_lower_precedence(self):
        assert needs_paren(BinOp.AND, BinOp.OR, Associativity.LEFT)
        assert not needs_paren(BinOp.OR, BinOp.AND, Associativity.LEFT)

    def test_same_associative_operator(self):
        assert not needs_paren(BinOp.AND, BinOp.AND, Associativity.LEFT)
        assert not needs_paren(BinOp.AND, BinOp.AND, Associativity.RIGHT)

    def test_same_precedence_non_associative(self):
        assert needs_paren(BinOp.SUB, BinOp.SUB, Associativity.RIGHT)
        assert needs_paren(BinOp.EQ, BinOp.NE, Associativity.RIGHT)
        assert not needs_paren(BinOp.SUB, BinOp.ADD, Associativity.LEFT)

    def test_shift_and_arithmetic(self):
        assert needs_paren(BinOp.SHL, BinOp.ADD, Associativity.LEFT)
        assert needs_paren(BinOp.ADD, BinOp.SHR, Associativity.RIGHT)


class TestSuggFromAst:
    @pytest.mark.parametrize(
        "source, kind, op",
        [
            ("x", SuggKind.NON_PAREN, None),
            ("f(x)", SuggKind.NON_PAREN, None),
            ("!x", SuggKind.NON_PAREN, None),
            ("(a || b)", SuggKind.NON_PAREN, None),
            ("a || b", SuggKind.BIN_OP, BinOp.OR),
            ("a == b", SuggKind.BIN_OP, BinOp.EQ),
            ("x as bool", SuggKind.BIN_OP, BinOp.AS),
        ],
    )
    def test_kind(self, reader, source, kind, op):
        sugg = _cond(reader, source)
        assert sugg.text == source
        assert sugg.kind is kind
        assert sugg.op is op

    def test_conditional_is_maybe_paren(self, reader):
        parsed = reader.read("x = if a { b } else { c };")
        value = parsed.first_expr().value
        assert Sugg.ast(parsed.source_map, value, "..").kind is SuggKind.MAYBE_PAREN

    def test_unreadable_span_uses_default(self, reader):
        from ifcollapse.source_map import SourceMap

        parsed = reader.read("if x { }")
        sugg = Sugg.ast(SourceMap(""), parsed.first_expr().cond, "..")
        assert sugg.text == ".."


class TestAnd:
    @pytest.mark.parametrize(
        "lhs, rhs, expected",
        [
            ("x", "y", "x && y"),
            ("a || b", "c", "(a || b) && c"),
            ("a", "b || c", "a && (b || c)"),
            ("a && b", "c && d", "a && b && c && d"),
            ("a == b", "c < d", "a == b && c < d"),
            ("(a || b)", "c", "(a || b) && c"),
            ("!a", "-b > 0", "!a && -b > 0"),
            ("x as bool", "y", "x as bool && y"),
        ],
    )
    def test_and(self, reader, lhs, rhs, expected):
        assert str(_cond(reader, lhs).and_(_cond(reader, rhs))) == expected

    def test_or(self, reader):
        assert str(_cond(reader, "a && b").or_(_cond(reader, "c"))) == "a && b || c"

    def test_maybe_paren_operand(self):
        closure = Sugg("|| true", SuggKind.MAYBE_PAREN)
        assert str(closure.and_(Sugg("x"))) == "(|| true) && x"

    def test_maybe_par(self):
        assert Sugg("x").maybe_par().text == "x"
        assert Sugg("a || b", SuggKind.BIN_OP, BinOp.OR).maybe_par().text == "(a || b)"
        # `(a) || (b)` is not wrapped by a single pair
        assert Sugg("(a) || (b)", SuggKind.BIN_OP, BinOp.OR).maybe_par().text == "((a) || (b))"

    def test_make_binop_result_kind(self):
        result = make_binop(BinOp.AND, Sugg("x"), Sugg("y"))
        assert result.kind is SuggKind.BIN_OP
        assert result.op is BinOp.AND
