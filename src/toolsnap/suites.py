"""
Test suite cleanup helpers.
"""
from __future__ import annotations

from typing import Optional, Protocol


class TestSuite(Protocol):
    """Anything that owns resources released by ``cleanup()``."""

    # Not a pytest test class, even when imported into a test module
    __test__ = False

    def cleanup(self) -> None:
        ...


def cleanup_test_suites(*suites: Optional[TestSuite]) -> None:
    """Clean up every suite in order, skipping ``None`` entries."""
    for suite in suites:
        if suite is not None:
            suite.cleanup()
