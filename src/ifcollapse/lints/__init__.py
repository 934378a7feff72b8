"""ifcollapse.lints: lint passes.

Importing this package registers every pass with ``LintPass``.
"""
from ifcollapse.lints.base import Level, Lint, LintPass
from ifcollapse.lints.collapsible_if import COLLAPSIBLE_IF, CollapsibleIf

__all__ = [
    "Level",
    "Lint",
    "LintPass",
    "COLLAPSIBLE_IF",
    "CollapsibleIf",
]
