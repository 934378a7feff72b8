"""Tests for child access and tree walks."""

from ifcollapse.tree import nodes
from ifcollapse.tree.iteration import get_children, iterate_all_subitems, walk_exprs
from ifcollapse.tree.nodes import NodeKind


class TestChildren:
    def test_if_children_skip_missing_else(self, reader):
        outer = reader.read("if x { y(); }").first_expr()
        children = get_children(outer)
        assert [c.kind for c in children] == [NodeKind.PATH, NodeKind.BLOCK]

    def test_if_let_children(self, reader):
        outer = reader.read("if let Some(a) = b { } else { }").first_expr()
        kinds = [c.kind for c in get_children(outer)]
        assert kinds == [NodeKind.PAT, NodeKind.PATH, NodeKind.BLOCK, NodeKind.BLOCK]

    def test_every_kind_has_an_accessor(self):
        from ifcollapse.tree.iteration import kind2func

        assert set(kind2func) == set(NodeKind)


class TestWalks:
    def test_pre_order(self, reader):
        parsed = reader.read("a + b;")
        kinds = [n.kind for n in iterate_all_subitems(parsed.root)]
        assert kinds == [
            NodeKind.BLOCK,
            NodeKind.STMT,
            NodeKind.BINARY,
            NodeKind.PATH,
            NodeKind.PATH,
        ]

    def test_walk_exprs_is_children_first(self, reader):
        parsed = reader.read("if x { if y { z(); } }")
        ifs = [n for n in walk_exprs(parsed.root) if n.kind is NodeKind.IF]
        outer = parsed.first_expr()
        assert len(ifs) == 2
        assert ifs[-1] is outer
        assert ifs[0] is outer.then.stmts[0].node

    def test_walk_exprs_skips_non_expressions(self, reader):
        parsed = reader.read("let a = 1; { b; }")
        for node in walk_exprs(parsed.root):
            assert node.is_expr
            assert not isinstance(node, (nodes.Block, nodes.Stmt, nodes.Local, nodes.Pat))
