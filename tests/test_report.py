# -*- coding: utf-8 -*-
"""Tests for the text progress report."""
import pytest

from academic_progress.aggregator import aggregate
from academic_progress.report import (average_band, format_progress_summary, gpa_band, grade_display,
                                      group_by_year, progress_line, status_label)
from tests.factories import make_record


@pytest.mark.parametrize("status, raw, expected", [
    ("completed", "92", "92 (A+)"),
    ("completed", "72.5", "72.5 (B-)"),
    ("completed", "150", "150 (A+)"),
    ("completed", " B+ ", "B+"),
    ("completed", "N/A", "N/A"),
    ("completed", "", "N/A"),
    ("in-progress", "88", "In Progress"),
    ("planned", None, "Not Started"),
])
def test_grade_display(status: str, raw, expected: str) -> None:
    record = make_record("r1", "CS101", status=status, raw_value=raw)
    assert grade_display(record, raw) == expected


def test_status_label() -> None:
    assert status_label("completed") == "Completed"
    assert status_label("in-progress") == "In-progress"


@pytest.mark.parametrize("gpa, band", [(4.0, "excellent"), (3.7, "excellent"), (3.2, "good"), (2.0, "fair"),
                                       (1.9, "at risk")])
def test_gpa_band(gpa: float, band: str) -> None:
    assert gpa_band(gpa) == band


def test_average_band() -> None:
    assert average_band(85) == "excellent"
    assert average_band(70) == "good"
    assert average_band(65) == "fair"
    assert average_band(10) == "at risk"


def test_progress_line(example_records) -> None:
    summary = aggregate(example_records)
    assert progress_line(summary) == "5% Complete (+3% In Progress)"
    assert progress_line(aggregate(example_records[:2])) == "5% Complete"


def test_group_by_year_most_recent_first(example_records) -> None:
    grouped = group_by_year(example_records)
    assert list(grouped) == [2024, 2023]
    assert [r.course_code for r in grouped[2024]] == ["MATH101", "CS201"]


def test_format_progress_summary(example_records) -> None:
    summary = aggregate(example_records)
    text = format_progress_summary(summary, example_records)

    assert "🎓 DEGREE PROGRESS" in text
    assert "5% Complete (+3% In Progress)" in text
    assert "Completed: 2   In Progress: 1   Remaining: 37" in text
    assert "Standard GPA (4.0 scale): 2.00 (fair)" in text
    assert "Numerical average: 70.0% (good)" in text
    assert text.index("📅 2024  (GPA 0.00)") < text.index("📅 2023  (GPA 4.00)")
    assert "95 (A+)" in text
    assert "In Progress" in text
    assert text.endswith("Total: 3 course(s)")


def test_format_progress_summary_lists_unavailable_grades() -> None:
    records = [make_record("r1", "CS101", raw_value="Decryption Error")]
    text = format_progress_summary(aggregate(records), records)
    assert "⚠ Grades unavailable for: CS101" in text


def test_format_progress_summary_without_records() -> None:
    text = format_progress_summary(aggregate([]))
    assert "0% Complete" in text
    assert text.endswith("📚 No courses recorded.")
