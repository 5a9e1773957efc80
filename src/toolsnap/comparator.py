"""
Comparison of normalized output against stored snapshots.

Comparison is literal: two snapshots match only if their text is identical.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class ComparisonResult:
    """Result of comparing actual output with a stored snapshot."""

    match: bool
    expected: str
    actual: str
    error_message: Optional[str] = None


def render_diff(expected: str, actual: str) -> str:
    """Render the content of a ``.snap.diff`` artifact."""
    return f"=== Expected ===\n{expected}\n\n=== Actual ===\n{actual}"


def mismatch_message(expected: str, actual: str) -> str:
    return f"Result doesn't match snapshot.\nExpected:\n{expected}\n\nActual:\n{actual}"


class Comparator:
    """Compares snapshot text."""

    def compare(self, actual: str, expected: str) -> ComparisonResult:
        if actual == expected:
            return ComparisonResult(match=True, expected=expected, actual=actual)

        return ComparisonResult(
            match=False,
            expected=expected,
            actual=actual,
            error_message=mismatch_message(expected, actual),
        )
