# -*- coding: utf-8 -*-
"""Tests for raw grade normalization."""
import pytest

from academic_progress.config import DEFAULT_CONFIG
from academic_progress.normalizer import is_unavailable, normalize, numeric_to_letter


@pytest.mark.parametrize("raw, letter", [
    ("95", "A+"),
    ("90", "A+"),
    ("89.9", "A"),
    ("85", "A"),
    ("80", "A-"),
    ("77", "B+"),
    ("73", "B"),
    ("70", "B-"),
    ("67", "C+"),
    ("63", "C"),
    ("60", "C-"),
    ("57", "D+"),
    ("53", "D"),
    ("50", "D-"),
    ("49.99", "F"),
    ("0", "F"),
])
def test_numeric_breakpoints(raw: str, letter: str) -> None:
    """Numeric grades map through the percentage breakpoints."""
    grade = normalize(raw)
    assert grade is not None
    assert grade.letter == letter
    assert grade.numeric_estimate == float(raw)
    assert grade.is_numeric


def test_numeric_values_above_100_are_clamped() -> None:
    """Values over 100 are capped, not rejected."""
    grade = normalize("150")
    assert grade is not None
    assert grade.letter == "A+"
    assert grade.numeric_estimate == 100.0


def test_numeric_value_with_whitespace() -> None:
    grade = normalize("  72 ")
    assert grade is not None
    assert grade.letter == "B-"
    assert grade.numeric_estimate == 72.0


@pytest.mark.parametrize("raw, letter, estimate", [
    ("A+", "A+", 95),
    ("A", "A", 87.5),
    ("b+", "B+", 77.5),
    (" c- ", "C-", 62.5),
    ("D", "D", 55),
    ("f", "F", 45),
])
def test_letter_grades_use_midpoints(raw: str, letter: str, estimate: float) -> None:
    """Letters are case-insensitive and carry their band midpoint."""
    grade = normalize(raw)
    assert grade is not None
    assert grade.letter == letter
    assert grade.numeric_estimate == estimate
    assert not grade.is_numeric


@pytest.mark.parametrize("raw", [None, "", "   ", "N/A", "Error", "Decryption Error", "Pass", "E", "nan", "inf",
                                 "9_5", "1_000"])
def test_unresolvable_values(raw) -> None:
    """Placeholders, blanks and unknown text do not resolve."""
    assert normalize(raw) is None


def test_non_string_input_is_coerced() -> None:
    grade = normalize(88)
    assert grade is not None
    assert grade.letter == "A"


def test_is_unavailable() -> None:
    assert is_unavailable(None)
    assert is_unavailable(" N/A ")
    assert not is_unavailable("B")


def test_numeric_to_letter_below_every_breakpoint() -> None:
    assert numeric_to_letter(-5, DEFAULT_CONFIG) == "F"
