"""Test runner for ``collapsible_if`` cases.

This module provides the main entry point for running lint tests defined
as :class:`CollapseCase` dataclasses.
"""

from __future__ import annotations

from typing import Callable, Optional

import pytest

from ifcollapse.core.stats import LintStatistics
from ifcollapse.diagnostics import DiagnosticCollector
from ifcollapse.driver import LintDriver

from .assertions import (
    assert_applies_to,
    assert_no_diagnostic,
    assert_rejected,
    assert_single_diagnostic,
    assert_suggestion,
)
from .cases import CollapseCase
from .reader import OPAQUE_MACROS, ParsedSource, SourceReader

LINT_NAME = "collapsible_if"


def run_collapse_case(
    case: CollapseCase,
    stats: Optional[LintStatistics] = None,
) -> ParsedSource:
    """Run a lint test case.

    1. Read the snippet into a tree
    2. Run every enabled lint pass over it
    3. Check the diagnostic, its suggestion and the applied result
    4. For silent cases, check which guard (if any) rejected the match

    Raises:
        pytest.skip: If the case should be skipped.
        AssertionError: If any assertion fails.
    """
    if case.skip:
        pytest.skip(case.skip)

    opaque = case.opaque_macros if case.opaque_macros is not None else OPAQUE_MACROS
    parsed = SourceReader(opaque_macros=opaque).read(case.source, f"{case.name}.rs")

    stats = stats if stats is not None else LintStatistics()
    sink = DiagnosticCollector()
    diagnostics = LintDriver(stats=stats).check_tree(parsed.root, parsed.source_map, sink)
    assert list(sink) == diagnostics

    if not case.expect_diagnostic:
        assert_no_diagnostic(diagnostics, case.source)
        if case.rejected_by is not None:
            assert_rejected(stats, LINT_NAME, case.rejected_by)
        return parsed

    diagnostic = assert_single_diagnostic(diagnostics, LINT_NAME)
    if case.expected_message is not None:
        assert diagnostic.message == case.expected_message
    suggestion = assert_suggestion(
        diagnostic,
        replacement=case.expected_replacement,
        applicability=case.applicability,
        contains=case.replacement_contains,
    )
    if case.expected_fixed is not None:
        assert_applies_to(suggestion, parsed.source_map, case.expected_fixed)
    return parsed


def create_parametrized_test(
    cases: list[CollapseCase],
) -> Callable:
    """Create a parametrized test function for a list of cases.

    Example::

        CASES = [CollapseCase(...), ...]

        @create_parametrized_test(CASES)
        def test_collapsible_if(case):
            run_collapse_case(case)
    """
    return pytest.mark.parametrize(
        "case",
        cases,
        ids=lambda c: c.test_id,
    )
