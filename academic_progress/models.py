# -*- coding: utf-8 -*-
"""
Data models for grade records and degree-progress results.

Records are supplied by the caller as an immutable snapshot; every other model
here is derived and recomputed on each call.
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass, field

from .errors import MalformedRecordError


# Type literals for commonly used values
Term = t.Literal["Fall", "Winter", "Spring", "Summer"]
Status = t.Literal["completed", "in-progress"]

STATUS_COMPLETED = "completed"
STATUS_IN_PROGRESS = "in-progress"

TermKey = tuple[int, str]  # (year, term)


@dataclass(frozen=True)
class GradeRecord:
    """One course attempt as stored by the backend."""
    id: str
    course_code: str
    term: str
    year: int
    status: str
    raw_value: t.Optional[str] = None  # decrypted grade when carried on the record itself

    @classmethod
    def from_mapping(cls, data: t.Mapping[str, t.Any]) -> "GradeRecord":
        """
        Build a record from a backend row.

        :param data: Mapping with id, course_code, term, year and status keys,
            and optionally an already decrypted "raw_value".
        :return: A GradeRecord.
        :raises MalformedRecordError: If a required field is absent or year is not an integer.
        """
        record_id = data.get("id")
        for name in ("id", "course_code", "term", "year", "status"):
            value = data.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise MalformedRecordError(record_id, name)

        year = data["year"]
        if isinstance(year, bool) or (isinstance(year, float) and not year.is_integer()):
            raise MalformedRecordError(record_id, "year", f"expected an integer, got {year!r}")
        try:
            year = int(year)
        except (TypeError, ValueError):
            raise MalformedRecordError(record_id, "year", f"expected an integer, got {year!r}") from None

        raw_value = data.get("raw_value")
        return cls(
            id=str(record_id),
            course_code=str(data["course_code"]),
            term=str(data["term"]),
            year=year,
            status=str(data["status"]),
            raw_value=None if raw_value is None else str(raw_value),
        )


@dataclass(frozen=True)
class CanonicalGrade:
    """A grade resolved to one of the canonical letters."""
    letter: str
    numeric_estimate: float
    is_numeric: bool = False  # True when the raw value was a percentage


@dataclass(frozen=True)
class ProgressSummary:
    """Degree progress derived from a snapshot of grade records."""
    overall_gpa: float
    term_gpas: dict[TermKey, float] = field(default_factory=dict)
    year_gpas: dict[int, float] = field(default_factory=dict)
    completed_courses: int = 0
    in_progress_courses: int = 0
    total_courses: int = 0
    remaining_courses: int = 0
    percent_complete: int = 0
    percent_in_progress: int = 0
    numerical_average: float = 0.0
    unresolved_courses: tuple[str, ...] = ()  # completed courses whose grade did not resolve


@dataclass(frozen=True)
class CourseRequirement:
    """A course the student's program requires."""
    course_code: str
    year: int
    requirement_type: str = "required"
    credit_weight: float = 0.5
    min_grade: t.Optional[str] = None


@dataclass(frozen=True)
class Prerequisite:
    """Links a course to one course that must be completed first."""
    course_code: str
    prerequisite_code: str
    min_grade: t.Optional[str] = None


@dataclass(frozen=True)
class CourseSuggestion:
    """A requirement the student can register for next."""
    course_code: str
    year: int
    requirement_type: str


@dataclass(frozen=True)
class StudentInfo:
    """Identity details printed on exported reports."""
    name: str
    student_id: str
    program: t.Optional[str] = None
