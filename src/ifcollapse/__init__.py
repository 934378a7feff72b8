"""ifcollapse: a lint engine for collapsible ``if`` expressions.

Entry points:
    ifcollapse.driver.LintDriver       - run the enabled lint passes over a tree
    ifcollapse.lints.CollapsibleIf     - the ``collapsible_if`` lint pass
    ifcollapse.tree.patterns           - the tree pattern language
"""

__version__ = "0.1.0"
