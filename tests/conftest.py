# -*- coding: utf-8 -*-
"""Shared fixtures for the academic progress tests."""
import typing as t

import pytest

from academic_progress.models import GradeRecord
from tests.factories import make_record


@pytest.fixture
def example_records() -> list[GradeRecord]:
    """Two completed courses (one numeric, one letter) and one in progress."""
    return [
        make_record("r1", "CS101", "completed", "95", "Fall", 2023),
        make_record("r2", "MATH101", "completed", "F", "Winter", 2024),
        make_record("r3", "CS201", "in-progress", "N/A", "Fall", 2024),
    ]


@pytest.fixture
def snapshot_rows() -> dict[str, t.Any]:
    """A snapshot as exported from the backend: encrypted rows plus decrypted values."""
    return {
        "records": [
            {"id": "g1", "course_code": "CS101", "term": "Fall", "year": 2023, "status": "completed",
             "grade": "ENC::a1"},
            {"id": "g2", "course_code": "MATH101", "term": "Winter", "year": 2024, "status": "completed",
             "grade": "ENC::b2"},
            {"id": "g3", "course_code": "CS201", "term": "Fall", "year": 2024, "status": "in-progress",
             "grade": "ENC::c3"},
        ],
        "decrypted": {"g1": "88", "g2": "B+", "g3": "N/A"},
        "student": {"name": "Jordan Lee", "student_id": "1001", "program": "Computer Science"},
    }
