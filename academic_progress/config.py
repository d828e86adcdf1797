# -*- coding: utf-8 -*-
"""
Grading configuration for the academic progress core.

The degree total, the percentage breakpoints, the 4.0 scale and the letter
midpoints are bundled into one immutable object that callers pass explicitly.
`load_config()` applies environment overrides on top of the defaults.
"""
from __future__ import annotations

import os
import typing as t
from dataclasses import dataclass, field
from types import MappingProxyType


TERMS: tuple[str, ...] = ("Winter", "Spring", "Summer", "Fall")  # calendar order

# (minimum percentage, letter), highest first. Anything below the last entry is an F.
DEFAULT_GRADE_BREAKPOINTS: tuple[tuple[float, str], ...] = (
    (90, "A+"),
    (85, "A"),
    (80, "A-"),
    (77, "B+"),
    (73, "B"),
    (70, "B-"),
    (67, "C+"),
    (63, "C"),
    (60, "C-"),
    (57, "D+"),
    (53, "D"),
    (50, "D-"),
)
FAILING_LETTER = "F"

DEFAULT_GPA_SCALE: t.Mapping[str, float] = MappingProxyType({
    "A+": 4.0,
    "A": 4.0,
    "A-": 3.7,
    "B+": 3.3,
    "B": 3.0,
    "B-": 2.7,
    "C+": 2.3,
    "C": 2.0,
    "C-": 1.7,
    "D+": 1.3,
    "D": 1.0,
    "D-": 0.7,
    "F": 0.0,
})

# Numeric value assumed when only a letter grade is known
DEFAULT_LETTER_MIDPOINTS: t.Mapping[str, float] = MappingProxyType({
    "A+": 95,
    "A": 87.5,
    "A-": 82.5,
    "B+": 77.5,
    "B": 75,
    "B-": 72.5,
    "C+": 67.5,
    "C": 65,
    "C-": 62.5,
    "D+": 57.5,
    "D": 55,
    "D-": 52.5,
    "F": 45,
})

DEFAULT_UNAVAILABLE_VALUES: frozenset[str] = frozenset({"N/A", "Error", "Decryption Error"})

DEFAULT_DEGREE_TOTAL_COURSES = 40
DEFAULT_COURSES_PER_TERM = 5
DEFAULT_REGULAR_TERMS: tuple[str, ...] = ("Fall", "Winter")
MAX_PERCENTAGE = 100.0


@dataclass(frozen=True)
class GradingConfig:
    """Tunable grading rules shared by every core component."""
    degree_total_courses: int = DEFAULT_DEGREE_TOTAL_COURSES
    grade_breakpoints: tuple[tuple[float, str], ...] = DEFAULT_GRADE_BREAKPOINTS
    gpa_scale: t.Mapping[str, float] = field(default_factory=lambda: DEFAULT_GPA_SCALE)
    letter_midpoints: t.Mapping[str, float] = field(default_factory=lambda: DEFAULT_LETTER_MIDPOINTS)
    unavailable_values: frozenset[str] = DEFAULT_UNAVAILABLE_VALUES
    courses_per_term: int = DEFAULT_COURSES_PER_TERM
    regular_terms: tuple[str, ...] = DEFAULT_REGULAR_TERMS

    def __post_init__(self) -> None:
        if self.degree_total_courses < 1:
            raise ValueError(
                f"degree_total_courses must be at least 1 (got {self.degree_total_courses})"
            )
        if self.courses_per_term < 1:
            raise ValueError(f"courses_per_term must be at least 1 (got {self.courses_per_term})")

        thresholds = [threshold for threshold, _ in self.grade_breakpoints]
        if thresholds != sorted(thresholds, reverse=True):
            raise ValueError("grade_breakpoints must be ordered from highest to lowest threshold")

        letters = [letter for _, letter in self.grade_breakpoints] + [FAILING_LETTER]
        missing = [letter for letter in letters if letter not in self.gpa_scale]
        if missing:
            raise ValueError(f"gpa_scale has no point value for: {missing}")
        missing = [letter for letter in letters if letter not in self.letter_midpoints]
        if missing:
            raise ValueError(f"letter_midpoints has no estimate for: {missing}")

        unknown_terms = [term for term in self.regular_terms if term not in TERMS]
        if not self.regular_terms or unknown_terms:
            raise ValueError(
                f"regular_terms must be a non-empty subset of {list(TERMS)} (got {list(self.regular_terms)})"
            )

    @property
    def letters(self) -> tuple[str, ...]:
        """All canonical letters, best first."""
        return tuple(letter for _, letter in self.grade_breakpoints) + (FAILING_LETTER,)


DEFAULT_CONFIG = GradingConfig()


def load_config(environ: t.Optional[t.Mapping[str, str]] = None) -> GradingConfig:
    """
    Build a GradingConfig from environment variables.

    Recognized variables: DEGREE_TOTAL_COURSES, COURSES_PER_TERM and
    REGULAR_TERMS (comma separated, e.g. "Fall,Winter"). Unset variables
    keep their defaults.
    """
    env = os.environ if environ is None else environ

    degree_total = env.get("DEGREE_TOTAL_COURSES", "")
    courses_per_term = env.get("COURSES_PER_TERM", "")
    regular_terms = env.get("REGULAR_TERMS", "")

    try:
        return GradingConfig(
            degree_total_courses=int(degree_total) if degree_total.strip() else DEFAULT_DEGREE_TOTAL_COURSES,
            courses_per_term=int(courses_per_term) if courses_per_term.strip() else DEFAULT_COURSES_PER_TERM,
            regular_terms=(
                tuple(term.strip().capitalize() for term in regular_terms.split(",") if term.strip())
                if regular_terms.strip()
                else DEFAULT_REGULAR_TERMS
            ),
        )
    except ValueError as e:
        raise ValueError(f"Invalid grading configuration in environment: {e}") from e
