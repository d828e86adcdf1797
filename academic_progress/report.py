# -*- coding: utf-8 -*-
"""Text presentation of grade records and progress summaries."""
from __future__ import annotations

import typing as t

from .aggregator import resolve_raw_value, term_sort_key
from .config import DEFAULT_CONFIG, GradingConfig
from .models import STATUS_COMPLETED, STATUS_IN_PROGRESS, GradeRecord, ProgressSummary
from .normalizer import is_unavailable, normalize, numeric_to_letter


def status_label(status: str) -> str:
    """Capitalize a status for display ("in-progress" -> "In-progress")."""
    return status[:1].upper() + status[1:]


def _format_number(value: float) -> str:
    return f"{value:g}"


def grade_display(
        record: GradeRecord,
        raw_value: t.Optional[str],
        config: GradingConfig = DEFAULT_CONFIG,
) -> str:
    """Grade cell text for a record: "92 (A+)", "B+", "N/A", "In Progress" or "Not Started"."""
    if record.status == STATUS_IN_PROGRESS:
        return "In Progress"
    if record.status != STATUS_COMPLETED:
        return "Not Started"
    if is_unavailable(raw_value, config):
        return "N/A"

    grade = normalize(raw_value, config)
    if grade is not None and grade.is_numeric:
        number = float(raw_value.strip())
        return f"{_format_number(number)} ({numeric_to_letter(number, config)})"
    return raw_value.strip()


def gpa_band(gpa: float) -> str:
    """Qualitative band for a 4.0-scale GPA."""
    if gpa >= 3.7:
        return "excellent"
    if gpa >= 3.0:
        return "good"
    if gpa >= 2.0:
        return "fair"
    return "at risk"


def average_band(average: float) -> str:
    """Qualitative band for a percentage average."""
    if average >= 80:
        return "excellent"
    if average >= 70:
        return "good"
    if average >= 60:
        return "fair"
    return "at risk"


def progress_line(summary: ProgressSummary) -> str:
    """E.g. "5% Complete (+3% In Progress)"."""
    line = f"{summary.percent_complete}% Complete"
    if summary.percent_in_progress > 0:
        line += f" (+{summary.percent_in_progress}% In Progress)"
    return line


def group_by_year(records: t.Iterable[GradeRecord]) -> dict[int, list[GradeRecord]]:
    """Group records by year, most recent year first, keeping record order within a year."""
    grouped: dict[int, list[GradeRecord]] = {}
    for record in records:
        grouped.setdefault(record.year, []).append(record)
    return {year: grouped[year] for year in sorted(grouped, reverse=True)}


def format_progress_summary(
        summary: ProgressSummary,
        records: t.Sequence[GradeRecord] = (),
        decrypted: t.Optional[t.Mapping[str, t.Optional[str]]] = None,
        config: GradingConfig = DEFAULT_CONFIG,
) -> str:
    """
    Format a progress summary, followed by the course list grouped by year, as a table.

    :param summary: Result of aggregate().
    :param records: The records the summary was computed from.
    :param decrypted: Mapping of record id to decrypted grade value.
    :return: Formatted string.
    """
    lines = []
    lines.append("🎓 DEGREE PROGRESS")
    lines.append("=" * 80)
    lines.append(progress_line(summary))
    lines.append(
        f"Completed: {summary.completed_courses}   In Progress: {summary.in_progress_courses}   "
        f"Remaining: {summary.remaining_courses}"
    )
    lines.append(f"Standard GPA (4.0 scale): {summary.overall_gpa:.2f} ({gpa_band(summary.overall_gpa)})")
    lines.append(
        f"Numerical average: {summary.numerical_average:.1f}% ({average_band(summary.numerical_average)})"
    )
    if summary.unresolved_courses:
        lines.append(f"⚠ Grades unavailable for: {', '.join(summary.unresolved_courses)}")

    if not records:
        lines.append("=" * 80)
        lines.append("📚 No courses recorded.")
        return "\n".join(lines)

    for year, year_records in group_by_year(records).items():
        lines.append("")
        year_gpa = summary.year_gpas.get(year, 0.0)
        lines.append(f"📅 {year}  (GPA {year_gpa:.2f})")
        lines.append("-" * 80)
        lines.append(f"{'Course':<14} {'Term':<8} {'Grade':<20} {'Status':<14} {'Term GPA':<8}")
        for record in sorted(year_records, key=lambda r: term_sort_key((r.year, r.term))):
            course = record.course_code[:13] if len(record.course_code) > 13 else record.course_code
            grade = grade_display(record, resolve_raw_value(record, decrypted), config)
            term_gpa = summary.term_gpas.get((record.year, record.term), 0.0)
            lines.append(
                f"{course:<14} {record.term:<8} {grade[:19]:<20} {status_label(record.status):<14} {term_gpa:<8.2f}"
            )

    lines.append("=" * 80)
    lines.append(f"Total: {len(records)} course(s)")
    return "\n".join(lines)
