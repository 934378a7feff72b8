"""Tree node model for the host language.

Nodes are plain dataclasses discriminated by a class-level ``kind``
(:class:`NodeKind`).  Patterns dispatch on ``kind`` the same way for every
node, so adding a node type means adding a ``NodeKind`` member, a class
here, and a child accessor in :mod:`ifcollapse.tree.iteration`.

Nodes compare by identity: a match binds *this* subtree, not an equal one.
"""
from __future__ import annotations

import dataclasses
from enum import Enum

from ifcollapse.core import typing
from ifcollapse.core.typing import ClassVar
from ifcollapse.tree.span import Span


class NodeKind(Enum):
    BLOCK = "block"
    STMT = "stmt"
    LOCAL = "local"
    PAT = "pat"
    IF = "if"
    IF_LET = "if_let"
    PATH = "path"
    LIT = "lit"
    CALL = "call"
    METHOD_CALL = "method_call"
    FIELD = "field"
    BINARY = "binary"
    UNARY = "unary"
    PAREN = "paren"
    CAST = "cast"
    ASSIGN = "assign"
    RANGE = "range"
    MAC_CALL = "mac_call"
    CLOSURE = "closure"
    BLOCK_EXPR = "block_expr"
    OTHER_EXPR = "other_expr"
    ITEM = "item"


class StmtKind(Enum):
    EXPR = "expr"  # trailing expression, no `;`
    SEMI = "semi"  # expression terminated by `;`
    LOCAL = "local"  # `let` binding
    ITEM = "item"  # `fn`, `struct`, `use`, ... declared inside a block


class Associativity(Enum):
    LEFT = "left"
    RIGHT = "right"
    BOTH = "both"
    NONE = "none"


class BinOp(Enum):
    """Binary operators with their precedence and associativity.

    Associativity ``BOTH`` means ``a op (b op c)`` may be printed without
    parentheses (the operator is associative).
    """

    AS = ("as", 14, Associativity.BOTH)
    MUL = ("*", 13, Associativity.BOTH)
    DIV = ("/", 13, Associativity.LEFT)
    REM = ("%", 13, Associativity.LEFT)
    ADD = ("+", 12, Associativity.BOTH)
    SUB = ("-", 12, Associativity.LEFT)
    SHL = ("<<", 11, Associativity.LEFT)
    SHR = (">>", 11, Associativity.LEFT)
    BIT_AND = ("&", 10, Associativity.BOTH)
    BIT_XOR = ("^", 9, Associativity.BOTH)
    BIT_OR = ("|", 8, Associativity.BOTH)
    EQ = ("==", 7, Associativity.LEFT)
    NE = ("!=", 7, Associativity.LEFT)
    LT = ("<", 7, Associativity.LEFT)
    LE = ("<=", 7, Associativity.LEFT)
    GT = (">", 7, Associativity.LEFT)
    GE = (">=", 7, Associativity.LEFT)
    AND = ("&&", 6, Associativity.BOTH)
    OR = ("||", 5, Associativity.BOTH)
    RANGE = ("..", 4, Associativity.NONE)
    RANGE_INCLUSIVE = ("..=", 4, Associativity.NONE)
    ASSIGN = ("=", 2, Associativity.RIGHT)

    def __init__(self, symbol: str, precedence: int, associativity: Associativity):
        self.symbol = symbol
        self.precedence = precedence
        self.associativity = associativity

    @property
    def is_shift(self) -> bool:
        return self in (BinOp.SHL, BinOp.SHR)

    @property
    def is_arith(self) -> bool:
        return self in (BinOp.ADD, BinOp.SUB, BinOp.MUL, BinOp.DIV, BinOp.REM)

    @classmethod
    def from_symbol(cls, symbol: str) -> "BinOp":
        for op in cls:
            if op.symbol == symbol:
                return op
        raise ValueError(f"Unknown binary operator: {symbol!r}")


class UnOp(Enum):
    NOT = "!"
    NEG = "-"
    DEREF = "*"
    REF = "&"


@dataclasses.dataclass(eq=False, repr=False)
class Node:
    """Base class of every tree node."""

    kind: ClassVar[NodeKind]
    span: Span

    @property
    def is_expr(self) -> bool:
        return self.kind not in (
            NodeKind.BLOCK,
            NodeKind.STMT,
            NodeKind.LOCAL,
            NodeKind.PAT,
            NodeKind.ITEM,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.span!r}>"


@dataclasses.dataclass(eq=False, repr=False)
class Pat(Node):
    """Irrefutable or refutable binding pattern, kept opaque."""

    kind = NodeKind.PAT


@dataclasses.dataclass(eq=False, repr=False)
class Stmt(Node):
    kind = NodeKind.STMT
    stmt_kind: StmtKind
    node: Node


@dataclasses.dataclass(eq=False, repr=False)
class Local(Node):
    kind = NodeKind.LOCAL
    pat: Pat
    init: Node | None = None


@dataclasses.dataclass(eq=False, repr=False)
class Block(Node):
    kind = NodeKind.BLOCK
    stmts: list[Stmt] = dataclasses.field(default_factory=list)

    def __len__(self) -> int:
        return len(self.stmts)

    def __getitem__(self, idx: int) -> Stmt:
        return self.stmts[idx]


@dataclasses.dataclass(eq=False, repr=False)
class If(Node):
    """``if cond then else els``; ``els`` is a Block, an If, an IfLet or None."""

    kind = NodeKind.IF
    cond: Node
    then: Block
    els: Node | None = None


@dataclasses.dataclass(eq=False, repr=False)
class IfLet(Node):
    """``if let pat = scrutinee then else els``."""

    kind = NodeKind.IF_LET
    pat: Pat
    scrutinee: Node
    then: Block
    els: Node | None = None


@dataclasses.dataclass(eq=False, repr=False)
class Path(Node):
    kind = NodeKind.PATH
    segments: tuple[str, ...]

    @property
    def name(self) -> str:
        return "::".join(self.segments)


@dataclasses.dataclass(eq=False, repr=False)
class Lit(Node):
    kind = NodeKind.LIT
    value: str


@dataclasses.dataclass(eq=False, repr=False)
class Call(Node):
    kind = NodeKind.CALL
    func: Node
    args: list[Node] = dataclasses.field(default_factory=list)


@dataclasses.dataclass(eq=False, repr=False)
class MethodCall(Node):
    kind = NodeKind.METHOD_CALL
    receiver: Node
    method: str
    args: list[Node] = dataclasses.field(default_factory=list)


@dataclasses.dataclass(eq=False, repr=False)
class Field(Node):
    kind = NodeKind.FIELD
    base: Node
    name: str


@dataclasses.dataclass(eq=False, repr=False)
class Binary(Node):
    kind = NodeKind.BINARY
    op: BinOp
    lhs: Node
    rhs: Node


@dataclasses.dataclass(eq=False, repr=False)
class Unary(Node):
    kind = NodeKind.UNARY
    op: UnOp
    operand: Node


@dataclasses.dataclass(eq=False, repr=False)
class Paren(Node):
    kind = NodeKind.PAREN
    inner: Node


@dataclasses.dataclass(eq=False, repr=False)
class Cast(Node):
    kind = NodeKind.CAST
    expr: Node
    ty: str


@dataclasses.dataclass(eq=False, repr=False)
class Assign(Node):
    """``target = value``, or ``target op= value`` when ``op`` is set."""

    kind = NodeKind.ASSIGN
    target: Node
    value: Node
    op: BinOp | None = None


@dataclasses.dataclass(eq=False, repr=False)
class Range(Node):
    kind = NodeKind.RANGE
    start: Node | None
    end: Node | None
    inclusive: bool = False


@dataclasses.dataclass(eq=False, repr=False)
class MacCall(Node):
    """Macro invocation left unexpanded (its body is opaque tokens)."""

    kind = NodeKind.MAC_CALL
    name: str


@dataclasses.dataclass(eq=False, repr=False)
class Closure(Node):
    kind = NodeKind.CLOSURE
    params: list[Pat]
    body: Node


@dataclasses.dataclass(eq=False, repr=False)
class BlockExpr(Node):
    kind = NodeKind.BLOCK_EXPR
    block: Block


@dataclasses.dataclass(eq=False, repr=False)
class OtherExpr(Node):
    """Expression no lint looks into (`loop`, `match`, indexing, ...).

    ``label`` names the construct; ``children`` are the expressions found
    inside it, so nested conditionals are still visited.
    """

    kind = NodeKind.OTHER_EXPR
    label: str
    children: list[Node] = dataclasses.field(default_factory=list)


@dataclasses.dataclass(eq=False, repr=False)
class Item(Node):
    """Item declared inside a block, with the expressions in its body."""

    kind = NodeKind.ITEM
    label: str
    children: list[Node] = dataclasses.field(default_factory=list)


Conditional = typing.Union[If, IfLet]
