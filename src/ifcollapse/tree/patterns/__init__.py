"""ifcollapse.tree.patterns: Pattern classes for tree matching.

Exports the most commonly used patterns for convenient imports.
"""
from ifcollapse.tree.patterns.base_pattern import BasePat
from ifcollapse.tree.patterns.abstracts import AnyPat, NonePat, OptPat, OrPat, AndPat
from ifcollapse.tree.patterns.expressions import IfPat, IfLetPat, KindPat
from ifcollapse.tree.patterns.instructions import BlockPat, ExprStmtPat, SemiStmtPat

__all__ = [
    "BasePat",
    "AnyPat",
    "NonePat",
    "OptPat",
    "OrPat",
    "AndPat",
    "IfPat",
    "IfLetPat",
    "KindPat",
    "BlockPat",
    "ExprStmtPat",
    "SemiStmtPat",
]
