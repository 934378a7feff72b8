"""Pytest configuration for ifcollapse tests.

Shared configuration for all test suites.
"""

import logging
import pathlib
import sys

import pytest

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Add project root to path for all tests to ensure imports work
PROJECT_ROOT = pathlib.Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))
sys.path.insert(0, str(PROJECT_ROOT / "tests"))


@pytest.fixture(autouse=True)
def _clean_mdc():
    """Every test starts and ends with an empty logging MDC."""
    from ifcollapse.core import IfCollapseLogger

    IfCollapseLogger.clean_mdc()
    yield
    IfCollapseLogger.clean_mdc()
