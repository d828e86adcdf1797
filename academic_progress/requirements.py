# -*- coding: utf-8 -*-
"""
Program requirement checks: minimum grades and next-course suggestions.
"""
from __future__ import annotations

import typing as t

from .aggregator import resolve_raw_value
from .config import DEFAULT_CONFIG, FAILING_LETTER, GradingConfig
from .models import (STATUS_COMPLETED, STATUS_IN_PROGRESS, CourseRequirement, CourseSuggestion, GradeRecord,
                     Prerequisite)
from .normalizer import normalize

DEFAULT_PASSING_GRADE = 50.0
DEFAULT_SUGGESTION_LIMIT = 5


def grade_floor(value: t.Optional[str], config: GradingConfig = DEFAULT_CONFIG) -> t.Optional[float]:
    """Return the lowest percentage a grade stands for.

    Numeric grades are their own floor (capped at 100). A letter grade maps to
    the breakpoint of its band, with F at 0.
    """
    grade = normalize(value, config)
    if grade is None:
        return None
    if grade.is_numeric:
        return grade.numeric_estimate
    if grade.letter == FAILING_LETTER:
        return 0.0
    for threshold, letter in config.grade_breakpoints:
        if letter == grade.letter:
            return float(threshold)
    return None


def meets_minimum(
        grade: t.Optional[str],
        min_grade: t.Optional[str] = None,
        passing_grade: float = DEFAULT_PASSING_GRADE,
        config: GradingConfig = DEFAULT_CONFIG,
) -> t.Optional[bool]:
    """Check a grade against a course minimum, or against the passing grade when there is none.

    :param grade: The student's grade, numeric or letter.
    :param min_grade: The minimum the program requires, numeric or letter.
    :param passing_grade: Percentage used when no usable minimum is given.
    :return: True or False, or None when the student's grade does not resolve.
    """
    value = grade_floor(grade, config)
    if value is None:
        return None
    required = grade_floor(min_grade, config) if min_grade is not None else None
    if required is None:
        required = passing_grade
    return value >= required


def suggest_courses(
        requirements: t.Sequence[CourseRequirement],
        records: t.Sequence[GradeRecord],
        prerequisites: t.Sequence[Prerequisite] = (),
        decrypted: t.Optional[t.Mapping[str, t.Optional[str]]] = None,
        limit: int = DEFAULT_SUGGESTION_LIMIT,
        config: GradingConfig = DEFAULT_CONFIG,
) -> list[CourseSuggestion]:
    """Suggest required courses the student can take next.

    A requirement qualifies when its course is neither completed nor in
    progress and every prerequisite has been completed, with a grade meeting
    the prerequisite's minimum when one is set. Earlier program years come
    first.

    :param requirements: The program's course requirements.
    :param records: The student's grade records.
    :param prerequisites: Prerequisite links for any course.
    :param decrypted: Mapping of record id to decrypted grade value.
    :param limit: Maximum number of suggestions.
    :return: Up to ``limit`` CourseSuggestion objects.
    """
    completed: dict[str, list[str]] = {}
    in_progress: set[str] = set()
    for record in records:
        if record.status == STATUS_COMPLETED:
            completed.setdefault(record.course_code, []).append(resolve_raw_value(record, decrypted))
        elif record.status == STATUS_IN_PROGRESS:
            in_progress.add(record.course_code)

    prerequisite_map: dict[str, list[Prerequisite]] = {}
    for prereq in prerequisites:
        prerequisite_map.setdefault(prereq.course_code, []).append(prereq)

    def _prerequisite_met(prereq: Prerequisite) -> bool:
        attempts = completed.get(prereq.prerequisite_code)
        if attempts is None:
            return False
        if prereq.min_grade is None:
            return True
        return any(meets_minimum(value, prereq.min_grade, config=config) for value in attempts)

    pending = [
        requirement for requirement in requirements
        if requirement.course_code not in completed and requirement.course_code not in in_progress
    ]
    pending.sort(key=lambda requirement: requirement.year)

    suggestions: list[CourseSuggestion] = []
    for requirement in pending:
        if len(suggestions) >= limit:
            break
        if all(_prerequisite_met(prereq) for prereq in prerequisite_map.get(requirement.course_code, [])):
            suggestions.append(CourseSuggestion(
                course_code=requirement.course_code,
                year=requirement.year,
                requirement_type=requirement.requirement_type,
            ))
    return suggestions
