# -*- coding: utf-8 -*-
"""Grade normalization, GPA and degree progress for a student's course records."""
from academic_progress.aggregator import aggregate
from academic_progress.config import DEFAULT_CONFIG, GradingConfig, load_config
from academic_progress.errors import MalformedRecordError, ProgressError
from academic_progress.gpa import calculate_gpa
from academic_progress.models import (CanonicalGrade, CourseRequirement, CourseSuggestion, GradeRecord,
                                      Prerequisite, ProgressSummary, StudentInfo)
from academic_progress.normalizer import normalize
from academic_progress.pdf_export import build_progress_report_pdf
from academic_progress.projection import project_graduation
from academic_progress.report import format_progress_summary
from academic_progress.requirements import meets_minimum, suggest_courses

__all__ = [
    "aggregate",
    "build_progress_report_pdf",
    "calculate_gpa",
    "format_progress_summary",
    "load_config",
    "meets_minimum",
    "normalize",
    "project_graduation",
    "suggest_courses",
    "CanonicalGrade",
    "CourseRequirement",
    "CourseSuggestion",
    "DEFAULT_CONFIG",
    "GradeRecord",
    "GradingConfig",
    "MalformedRecordError",
    "Prerequisite",
    "ProgressError",
    "ProgressSummary",
    "StudentInfo",
]
