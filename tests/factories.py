# -*- coding: utf-8 -*-
"""Builders for test data."""
import typing as t

from academic_progress.models import GradeRecord


def make_record(
        record_id: str,
        course_code: str,
        status: str = "completed",
        raw_value: t.Optional[str] = None,
        term: str = "Fall",
        year: int = 2024,
) -> GradeRecord:
    """Build a GradeRecord with sensible defaults."""
    return GradeRecord(
        id=record_id,
        course_code=course_code,
        term=term,
        year=year,
        status=status,
        raw_value=raw_value,
    )
