# -*- coding: utf-8 -*-
"""Tests for minimum-grade checks and course suggestions."""
import pytest

from academic_progress.models import CourseRequirement, Prerequisite
from academic_progress.requirements import grade_floor, meets_minimum, suggest_courses
from tests.factories import make_record


@pytest.mark.parametrize("value, floor", [
    ("85", 85.0),
    ("150", 100.0),
    ("B+", 77.0),
    ("a", 85.0),
    ("D-", 50.0),
    ("F", 0.0),
    ("N/A", None),
    ("Pass", None),
])
def test_grade_floor(value: str, floor) -> None:
    assert grade_floor(value) == floor


@pytest.mark.parametrize("grade, min_grade, expected", [
    ("75", "B", True),
    ("B-", "B", False),
    ("B", "73", True),
    ("45", None, False),
    ("50", None, True),
    ("D-", None, True),
    ("B", "garbage", True),
    ("N/A", "B", None),
])
def test_meets_minimum(grade: str, min_grade, expected) -> None:
    assert meets_minimum(grade, min_grade) is expected


def test_meets_minimum_custom_passing_grade() -> None:
    assert meets_minimum("55", passing_grade=60) is False


def _program() -> list[CourseRequirement]:
    return [
        CourseRequirement("CS301", 3),
        CourseRequirement("CS101", 1),
        CourseRequirement("CS201", 2),
        CourseRequirement("MATH101", 1),
        CourseRequirement("CS202", 2, requirement_type="elective"),
    ]


def test_suggests_pending_courses_by_program_year() -> None:
    records = [make_record("r1", "CS101", raw_value="80")]
    suggestions = suggest_courses(_program(), records)

    assert [s.course_code for s in suggestions] == ["MATH101", "CS201", "CS202", "CS301"]
    assert suggestions[2].requirement_type == "elective"


def test_in_progress_courses_are_not_suggested() -> None:
    records = [make_record("r1", "MATH101", status="in-progress")]
    suggestions = suggest_courses(_program(), records)

    assert "MATH101" not in [s.course_code for s in suggestions]


def test_prerequisites_must_be_completed() -> None:
    records = [make_record("r1", "MATH101", status="in-progress")]
    prerequisites = [Prerequisite("CS201", "CS101"), Prerequisite("CS301", "MATH101")]
    suggestions = suggest_courses(_program(), records, prerequisites)

    assert [s.course_code for s in suggestions] == ["CS101", "CS202"]


def test_prerequisite_minimum_grade_uses_best_attempt() -> None:
    records = [
        make_record("r1", "CS101", raw_value="55", term="Fall", year=2023),
        make_record("r2", "CS101", raw_value="enc", term="Winter", year=2024),
    ]
    prerequisites = [Prerequisite("CS201", "CS101", min_grade="C")]

    without_retake = suggest_courses(_program(), records, prerequisites, decrypted={"r2": "60"})
    assert "CS201" not in [s.course_code for s in without_retake]

    with_retake = suggest_courses(_program(), records, prerequisites, decrypted={"r2": "B"})
    assert "CS201" in [s.course_code for s in with_retake]


def test_suggestion_limit() -> None:
    assert len(suggest_courses(_program(), [], limit=2)) == 2
    assert len(suggest_courses(_program(), [])) == 5
