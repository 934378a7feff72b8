"""Pytest configuration for unit tests.

Fixtures build trees from source snippets, so no test assembles nodes by
hand unless it is testing the node model itself.
"""
import pytest

from ifcollapse.core import LintStatistics
from ifcollapse.driver import LintDriver
from ifcollapse.testing import SourceReader


@pytest.fixture
def reader() -> SourceReader:
    return SourceReader()


@pytest.fixture
def stats() -> LintStatistics:
    return LintStatistics()


@pytest.fixture
def driver(stats) -> LintDriver:
    return LintDriver(stats=stats)


@pytest.fixture
def lint(reader, driver):
    """Read *source* and return ``(parsed, diagnostics)``."""

    def _lint(source: str):
        parsed = reader.read(source)
        return parsed, driver.check_tree(parsed.root, parsed.source_map)

    return _lint
