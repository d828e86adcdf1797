# -*- coding: utf-8 -*-
"""Projected graduation term from the remaining course load."""
from __future__ import annotations

import math
import typing as t

from .config import DEFAULT_CONFIG, TERMS, GradingConfig
from .models import GradeRecord


def format_term(term: str, year: int) -> str:
    return f"{term} {year}"


def _next_term(term: str, year: int) -> tuple[str, int]:
    index = TERMS.index(term) + 1
    if index == len(TERMS):
        return TERMS[0], year + 1
    return TERMS[index], year


def latest_term(records: t.Iterable[GradeRecord]) -> t.Optional[tuple[str, int]]:
    """Return the most recent (term, year) among records with a known term, or None."""
    latest: t.Optional[tuple[int, int]] = None
    for record in records:
        if record.term not in TERMS:
            continue
        key = (record.year, TERMS.index(record.term))
        if latest is None or key > latest:
            latest = key
    if latest is None:
        return None
    year, index = latest
    return TERMS[index], year


def project_graduation(
        remaining_courses: int,
        courses_per_term: t.Optional[int],
        current_term: str,
        current_year: int,
        config: t.Optional[GradingConfig] = None,
) -> str:
    """Project the term in which the remaining courses will be finished.

    The remaining load is spread over the configured regular terms (Fall and
    Winter by default), starting with the first regular term after the
    current one.

    :param remaining_courses: Courses still to be taken.
    :param courses_per_term: Course load per regular term; defaults to the config value.
    :param current_term: Term the student is in now.
    :param current_year: Year of the current term.
    :param config: Grading rules; defaults to DEFAULT_CONFIG.
    :return: A display label such as "Winter 2027".
    :raises ValueError: On a negative remaining count, a load below 1 or an unknown term.
    """
    config = config or DEFAULT_CONFIG
    per_term = config.courses_per_term if courses_per_term is None else courses_per_term

    if remaining_courses < 0:
        raise ValueError(f"remaining_courses cannot be negative (got {remaining_courses})")
    if per_term < 1:
        raise ValueError(f"courses_per_term must be at least 1 (got {per_term})")
    term = current_term.strip().capitalize()
    if term not in TERMS:
        raise ValueError(f"Unknown term {current_term!r}. Expected one of: {', '.join(TERMS)}")

    year = current_year
    terms_needed = math.ceil(remaining_courses / per_term)
    while terms_needed > 0:
        term, year = _next_term(term, year)
        if term in config.regular_terms:
            terms_needed -= 1
    return format_term(term, year)
