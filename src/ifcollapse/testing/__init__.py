"""ifcollapse testing framework.

Lint tests are written as data: a :class:`CollapseCase` holds an input
snippet plus what the lint should report for it.  The
:class:`SourceReader` turns snippets into trees with spans into the
snippet text, so suggestions can be applied and compared as text.
It parses with tree-sitter, which comes with the ``test`` extra.

The ``runner`` module depends on pytest and is NOT re-exported from this
package.  Tests import it directly::

    from ifcollapse.testing import CollapseCase
    from ifcollapse.testing.runner import create_parametrized_test, run_collapse_case

    CASES = [
        CollapseCase(
            name="simple",
            source="if x { if y { foo(); } }",
            expected_replacement="if x && y { foo(); }",
        ),
    ]

    @create_parametrized_test(CASES)
    def test_collapsible_if(case):
        run_collapse_case(case)
"""

from .assertions import (
    assert_applies_to,
    assert_no_diagnostic,
    assert_rejected,
    assert_single_diagnostic,
    assert_suggestion,
)
from .cases import CollapseCase
from .reader import OPAQUE_MACROS, ParsedSource, ParseError, SourceReader, rust_parser

__all__ = [
    "CollapseCase",
    "SourceReader",
    "ParsedSource",
    "ParseError",
    "OPAQUE_MACROS",
    "rust_parser",
    "assert_applies_to",
    "assert_no_diagnostic",
    "assert_rejected",
    "assert_single_diagnostic",
    "assert_suggestion",
]
