"""Expression text with just enough parentheses.

A :class:`Sugg` is the source text of an expression plus what the printer
needs to know to splice it into a larger expression: whether it is a
binary operation (and which one), something that must be parenthesised
whenever it is combined, or an atom that never needs parentheses.
"""
from __future__ import annotations

import dataclasses
import enum

from ifcollapse.core import typing
from ifcollapse.tree import nodes
from ifcollapse.tree.nodes import Associativity, BinOp, NodeKind

if typing.TYPE_CHECKING:
    from ifcollapse.source_map import SourceMap


class SuggKind(enum.Enum):
    NON_PAREN = "non_paren"  # atoms, calls, paths, unary ops, ...
    MAYBE_PAREN = "maybe_paren"  # if, if let, closures: parenthesise when combined
    BIN_OP = "bin_op"


_MAYBE_PAREN_KINDS = frozenset({NodeKind.IF, NodeKind.IF_LET, NodeKind.CLOSURE})


def needs_paren(op: BinOp, other: BinOp, direction: Associativity) -> bool:
    """Return True if an operand built with *other* needs parentheses
    when placed on side *direction* of *op*."""
    if other.precedence < op.precedence:
        return True
    if other.precedence == op.precedence:
        if op is not other and op.associativity is not direction:
            return True
        if op is other and op.associativity is not Associativity.BOTH:
            return True
    # `a << b + c` parses, but nobody reads it right
    return (op.is_shift and other.is_arith) or (other.is_shift and op.is_arith)


@dataclasses.dataclass(frozen=True)
class Sugg:
    text: str
    kind: SuggKind = SuggKind.NON_PAREN
    op: BinOp | None = None

    @classmethod
    def ast(cls, source_map: "SourceMap", expr: nodes.Node, default: str) -> "Sugg":
        """Build a ``Sugg`` from the source text of *expr*.

        *default* stands in for the text when the span cannot be read.
        """
        text = source_map.snippet(expr.span, default)
        if expr.kind in _MAYBE_PAREN_KINDS:
            return cls(text, SuggKind.MAYBE_PAREN)
        if expr.kind is NodeKind.BINARY:
            return cls(text, SuggKind.BIN_OP, expr.op)
        if expr.kind is NodeKind.CAST:
            return cls(text, SuggKind.BIN_OP, BinOp.AS)
        if expr.kind is NodeKind.ASSIGN:
            return cls(text, SuggKind.BIN_OP, BinOp.ASSIGN)
        if expr.kind is NodeKind.RANGE:
            return cls(text, SuggKind.BIN_OP, BinOp.RANGE_INCLUSIVE if expr.inclusive else BinOp.RANGE)
        return cls(text, SuggKind.NON_PAREN)

    def maybe_par(self) -> "Sugg":
        """Parenthesise unless the text is an atom or already parenthesised."""
        if self.kind is SuggKind.NON_PAREN:
            return self
        if _has_enclosing_paren(self.text):
            return Sugg(self.text, SuggKind.NON_PAREN)
        return Sugg(f"({self.text})", SuggKind.NON_PAREN)

    def and_(self, rhs: "Sugg") -> "Sugg":
        """``self && rhs``."""
        return make_binop(BinOp.AND, self, rhs)

    def or_(self, rhs: "Sugg") -> "Sugg":
        """``self || rhs``."""
        return make_binop(BinOp.OR, self, rhs)

    def __str__(self) -> str:
        return self.text


def _has_enclosing_paren(text: str) -> bool:
    """Return True if *text* is wrapped in one matching pair of parens."""
    if not (text.startswith("(") and text.endswith(")")):
        return False
    depth = 0
    for idx, ch in enumerate(text):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0 and idx != len(text) - 1:
                return False
    return depth == 0


def _side(op: BinOp, operand: Sugg, direction: Associativity) -> str:
    if operand.kind is SuggKind.MAYBE_PAREN:
        return operand.maybe_par().text
    if operand.kind is SuggKind.BIN_OP and operand.op is not None:
        if needs_paren(op, operand.op, direction):
            return operand.maybe_par().text
    return operand.text


def make_binop(op: BinOp, lhs: Sugg, rhs: Sugg) -> Sugg:
    """Combine *lhs* and *rhs* with *op*, parenthesising only where needed."""
    text = f"{_side(op, lhs, Associativity.LEFT)} {op.symbol} {_side(op, rhs, Associativity.RIGHT)}"
    return Sugg(text, SuggKind.BIN_OP, op)
