"""Child access and traversal helpers for tree nodes."""
from __future__ import annotations

from ifcollapse.core import typing
from ifcollapse.tree import nodes
from ifcollapse.tree.nodes import NodeKind


def _present(*items: typing.Any) -> tuple:
    return tuple(i for i in items if i is not None)


kind2func: dict[NodeKind, typing.Callable[[typing.Any], tuple]] = {
    NodeKind.BLOCK: lambda x: tuple(x.stmts),
    NodeKind.STMT: lambda x: (x.node,),
    NodeKind.LOCAL: lambda x: _present(x.pat, x.init),
    NodeKind.PAT: lambda x: (),
    NodeKind.IF: lambda x: _present(x.cond, x.then, x.els),
    NodeKind.IF_LET: lambda x: _present(x.pat, x.scrutinee, x.then, x.els),
    NodeKind.PATH: lambda x: (),
    NodeKind.LIT: lambda x: (),
    NodeKind.CALL: lambda x: (x.func, *x.args),
    NodeKind.METHOD_CALL: lambda x: (x.receiver, *x.args),
    NodeKind.FIELD: lambda x: (x.base,),
    NodeKind.BINARY: lambda x: (x.lhs, x.rhs),
    NodeKind.UNARY: lambda x: (x.operand,),
    NodeKind.PAREN: lambda x: (x.inner,),
    NodeKind.CAST: lambda x: (x.expr,),
    NodeKind.ASSIGN: lambda x: (x.target, x.value),
    NodeKind.RANGE: lambda x: _present(x.start, x.end),
    NodeKind.MAC_CALL: lambda x: (),
    NodeKind.CLOSURE: lambda x: (*x.params, x.body),
    NodeKind.BLOCK_EXPR: lambda x: (x.block,),
    NodeKind.OTHER_EXPR: lambda x: tuple(x.children),
    NodeKind.ITEM: lambda x: tuple(x.children),
}


def get_children(node: nodes.Node) -> tuple:
    """Return the direct children of *node*, left to right."""
    return kind2func[node.kind](node)


def iterate_all_subitems(node: nodes.Node) -> typing.Iterator[nodes.Node]:
    """Yield *node* and every node below it, pre-order."""
    stack = [node]
    while stack:
        item = stack.pop()
        yield item
        stack.extend(reversed(get_children(item)))


def walk_exprs(root: nodes.Node) -> typing.Iterator[nodes.Node]:
    """Yield every expression node under *root*, children first.

    A nested ``if`` is therefore offered before the ``if`` containing it,
    the same order a left-to-right, children-first processor visits a tree.
    """
    stack: list[tuple[nodes.Node, bool]] = [(root, False)]
    while stack:
        item, expanded = stack.pop()
        if expanded:
            if item.is_expr:
                yield item
            continue
        stack.append((item, True))
        for child in reversed(get_children(item)):
            stack.append((child, False))
