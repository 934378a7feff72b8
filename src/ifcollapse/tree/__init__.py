"""ifcollapse.tree: syntax tree model and structural pattern matching.

This package provides the node and span model of the host language and a
pattern DSL for matching tree shapes with named captures.

Sub-packages:
    patterns    - Pattern classes for matching tree nodes
"""
