# -*- coding: utf-8 -*-
"""
Degree progress aggregation.

Course counts are driven by record status alone, while GPA and the numerical
average only see completed records whose grade resolves. A completed course
with an unreadable grade therefore still counts toward completion.
"""
from __future__ import annotations

import logging
import typing as t
from decimal import Decimal, ROUND_HALF_UP

from .config import DEFAULT_CONFIG, TERMS, GradingConfig
from .errors import MalformedRecordError
from .gpa import calculate_gpa
from .models import STATUS_COMPLETED, STATUS_IN_PROGRESS, GradeRecord, ProgressSummary, TermKey
from .normalizer import normalize

logger = logging.getLogger(__name__)


def round_half_up(x: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3)."""
    return int(Decimal(str(x)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def term_sort_key(key: TermKey) -> tuple[int, int]:
    """Chronological ordering for (year, term) keys; unknown terms sort last within a year."""
    year, term = key
    order = TERMS.index(term) if term in TERMS else len(TERMS)
    return year, order


def resolve_raw_value(
        record: GradeRecord,
        decrypted: t.Optional[t.Mapping[str, t.Optional[str]]] = None,
) -> str:
    """Look up the decrypted value for a record, falling back to the value it carries."""
    if decrypted is not None and record.id in decrypted:
        value = decrypted[record.id]
    else:
        value = record.raw_value
    return "" if value is None else str(value)


def _check_record(record: GradeRecord) -> None:
    if record.year is None:
        raise MalformedRecordError(record.id, "year")
    if record.term is None or not str(record.term).strip():
        raise MalformedRecordError(record.id, "term")


def completion_percentages(
        completed_courses: int,
        in_progress_courses: int,
        degree_total_courses: int,
) -> tuple[int, int]:
    """Return (percent complete, percent in progress).

    The in-progress share is capped by whatever the completed share leaves, so
    the two never add up to more than 100.
    """
    percent_complete = min(100, round_half_up(completed_courses / degree_total_courses * 100))
    percent_in_progress = min(
        100 - percent_complete,
        round_half_up(in_progress_courses / degree_total_courses * 100),
    )
    return percent_complete, percent_in_progress


def aggregate(
        records: t.Sequence[GradeRecord],
        decrypted: t.Optional[t.Mapping[str, t.Optional[str]]] = None,
        config: t.Optional[GradingConfig] = None,
) -> ProgressSummary:
    """Summarize degree progress for one student's grade records.

    :param records: The student's grade records. Never mutated.
    :param decrypted: Mapping of record id to decrypted grade value. Records
        absent from it fall back to their own ``raw_value``.
    :param config: Grading rules; defaults to DEFAULT_CONFIG.
    :return: A ProgressSummary.
    :raises MalformedRecordError: If a record has no year or term.
    """
    config = config or DEFAULT_CONFIG

    term_letters: dict[TermKey, list[str]] = {}
    year_letters: dict[int, list[str]] = {}
    all_letters: list[str] = []
    numeric_values: list[float] = []
    unresolved: list[str] = []
    completed_courses = 0
    in_progress_courses = 0

    for record in records:
        _check_record(record)
        term_key = (record.year, record.term)
        term_bucket = term_letters.setdefault(term_key, [])
        year_bucket = year_letters.setdefault(record.year, [])

        if record.status == STATUS_IN_PROGRESS:
            in_progress_courses += 1
            continue
        if record.status != STATUS_COMPLETED:
            continue
        completed_courses += 1

        grade = normalize(resolve_raw_value(record, decrypted), config)
        if grade is None:
            unresolved.append(record.course_code)
            continue

        term_bucket.append(grade.letter)
        year_bucket.append(grade.letter)
        all_letters.append(grade.letter)
        numeric_values.append(grade.numeric_estimate)

    if unresolved:
        logger.debug("Excluded %d completed course(s) with unresolved grades: %s",
                     len(unresolved), ", ".join(unresolved))

    total_courses = completed_courses + in_progress_courses
    percent_complete, percent_in_progress = completion_percentages(
        completed_courses, in_progress_courses, config.degree_total_courses
    )

    return ProgressSummary(
        overall_gpa=calculate_gpa(all_letters, config),
        term_gpas={
            key: calculate_gpa(term_letters[key], config)
            for key in sorted(term_letters, key=term_sort_key)
        },
        year_gpas={
            year: calculate_gpa(year_letters[year], config)
            for year in sorted(year_letters)
        },
        completed_courses=completed_courses,
        in_progress_courses=in_progress_courses,
        total_courses=total_courses,
        remaining_courses=max(0, config.degree_total_courses - total_courses),
        percent_complete=percent_complete,
        percent_in_progress=percent_in_progress,
        numerical_average=sum(numeric_values) / len(numeric_values) if numeric_values else 0.0,
        unresolved_courses=tuple(unresolved),
    )
