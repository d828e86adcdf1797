# -*- coding: utf-8 -*-
from __future__ import annotations

import typing as t

from fastmcp import FastMCP

from academic_progress.aggregator import aggregate
from academic_progress.config import load_config
from academic_progress.gpa import calculate_gpa as _calculate_gpa
from academic_progress.models import CourseRequirement, GradeRecord, Prerequisite
from academic_progress.normalizer import normalize
from academic_progress.projection import project_graduation as _project_graduation
from academic_progress.report import format_progress_summary
from academic_progress.requirements import DEFAULT_SUGGESTION_LIMIT, suggest_courses as _suggest_courses
from services.shared.models import (
    CanonicalGrade as PydanticCanonicalGrade,
    CourseSuggestion as PydanticCourseSuggestion,
    ProgressSummary as PydanticProgressSummary,
)

mcp = FastMCP("AcademicProgress")

CONFIG = load_config()


@mcp.tool()
def normalize_grade(raw_value: t.Optional[str]) -> PydanticCanonicalGrade:
    """Map a raw grade (percentage or letter) to its canonical letter and numeric estimate.

    :param raw_value: The decrypted grade, e.g. "92", "B+" or "N/A".
    :return: The canonical grade; ``resolvable`` is False for unavailable or unrecognized values.
    """
    return PydanticCanonicalGrade.from_core(normalize(raw_value, CONFIG))


@mcp.tool()
def calculate_gpa(letters: list[str]) -> float:
    """Unweighted GPA on the 4.0 scale. An empty list gives 0.0."""
    return _calculate_gpa(letters, CONFIG)


@mcp.tool()
def aggregate_progress(
        records: list[GradeRecord],
        decrypted: t.Optional[dict[str, t.Optional[str]]] = None,
) -> PydanticProgressSummary:
    """Summarize degree progress: GPAs by term and year, course counts and completion percentages.

    :param records: The student's grade records.
    :param decrypted: Mapping of record id to decrypted grade value.
    :return: The progress summary. Term GPA keys are "<year>-<term>".
    """
    return PydanticProgressSummary.from_core(aggregate(records, decrypted, CONFIG))


@mcp.tool()
def show_progress_summary(
        records: list[GradeRecord],
        decrypted: t.Optional[dict[str, t.Optional[str]]] = None,
) -> str:
    """Display degree progress and the course list grouped by year.

    :param records: The student's grade records.
    :param decrypted: Mapping of record id to decrypted grade value.
    :return: Formatted string showing the progress summary and course tables.
    """
    summary = aggregate(records, decrypted, CONFIG)
    return format_progress_summary(summary, records, decrypted, CONFIG)


@mcp.tool()
def project_graduation(
        remaining_courses: int,
        current_term: str,
        current_year: int,
        courses_per_term: t.Optional[int] = None,
) -> str:
    """Project the graduation term, e.g. "Winter 2027", from the remaining course load."""
    return _project_graduation(remaining_courses, courses_per_term, current_term, current_year, CONFIG)


@mcp.tool()
def suggest_courses(
        requirements: list[CourseRequirement],
        records: list[GradeRecord],
        prerequisites: t.Optional[list[Prerequisite]] = None,
        decrypted: t.Optional[dict[str, t.Optional[str]]] = None,
        limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> list[PydanticCourseSuggestion]:
    """Suggest required courses whose prerequisites are completed, earliest program year first."""
    suggestions = _suggest_courses(requirements, records, prerequisites or (), decrypted, limit, CONFIG)
    return [PydanticCourseSuggestion.from_core(suggestion) for suggestion in suggestions]


if __name__ == "__main__":
    mcp.run()
