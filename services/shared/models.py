"""
Shared Pydantic models for REST API serialization.

This module contains Pydantic equivalents of the dataclass models in
academic_progress.models, ensuring consistent JSON serialization across the
progress service, its MCP wrapper and the in-process MCP server.
"""
from __future__ import annotations

import typing as t
from dataclasses import asdict

from pydantic import BaseModel, ConfigDict, Field

from academic_progress import models as core


def term_key_to_str(key: core.TermKey) -> str:
    """(2024, "Fall") -> "2024-Fall"."""
    year, term = key
    return f"{year}-{term}"


def term_key_from_str(value: str) -> core.TermKey:
    """ "2024-Fall" -> (2024, "Fall")."""
    year, _, term = value.partition("-")
    if not term:
        raise ValueError(f"Invalid term key {value!r}, expected '<year>-<term>'")
    return int(year), term


class GradeRecord(BaseModel):
    """
    One course attempt as stored by the backend.
    """
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    course_code: str
    term: str
    year: int
    status: str
    raw_value: t.Optional[str] = None

    def to_core(self) -> core.GradeRecord:
        return core.GradeRecord(**self.model_dump())


class CanonicalGrade(BaseModel):
    """
    Normalization outcome. ``resolvable`` is False when the raw value could
    not be mapped to a letter; the other fields are then empty.
    """
    resolvable: bool = False
    letter: t.Optional[str] = None
    numeric_estimate: t.Optional[float] = None
    is_numeric: bool = False

    @classmethod
    def from_core(cls, grade: t.Optional[core.CanonicalGrade]) -> "CanonicalGrade":
        if grade is None:
            return cls()
        return cls(resolvable=True, **asdict(grade))


class ProgressSummary(BaseModel):
    """
    Degree progress derived from a snapshot of grade records.
    Term GPA keys are "<year>-<term>" strings, e.g. "2024-Fall".
    """
    overall_gpa: float = 0.0
    term_gpas: dict[str, float] = Field(default_factory=dict)
    year_gpas: dict[int, float] = Field(default_factory=dict)
    completed_courses: int = 0
    in_progress_courses: int = 0
    total_courses: int = 0
    remaining_courses: int = 0
    percent_complete: int = 0
    percent_in_progress: int = 0
    numerical_average: float = 0.0
    unresolved_courses: list[str] = Field(default_factory=list)

    @classmethod
    def from_core(cls, summary: core.ProgressSummary) -> "ProgressSummary":
        data = asdict(summary)
        data["term_gpas"] = {term_key_to_str(key): gpa for key, gpa in summary.term_gpas.items()}
        data["unresolved_courses"] = list(summary.unresolved_courses)
        return cls(**data)

    def to_core(self) -> core.ProgressSummary:
        data = self.model_dump()
        data["term_gpas"] = {term_key_from_str(key): gpa for key, gpa in self.term_gpas.items()}
        data["unresolved_courses"] = tuple(self.unresolved_courses)
        return core.ProgressSummary(**data)


class StudentInfo(BaseModel):
    name: str
    student_id: str
    program: t.Optional[str] = None

    def to_core(self) -> core.StudentInfo:
        return core.StudentInfo(**self.model_dump())


class CourseRequirement(BaseModel):
    # the backend stores min_grade as a number
    model_config = ConfigDict(coerce_numbers_to_str=True)

    course_code: str
    year: int
    requirement_type: str = "required"
    credit_weight: float = 0.5
    min_grade: t.Optional[str] = None

    def to_core(self) -> core.CourseRequirement:
        return core.CourseRequirement(**self.model_dump())


class Prerequisite(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    course_code: str
    prerequisite_code: str
    min_grade: t.Optional[str] = None

    def to_core(self) -> core.Prerequisite:
        return core.Prerequisite(**self.model_dump())


class CourseSuggestion(BaseModel):
    course_code: str
    year: int
    requirement_type: str = "required"

    @classmethod
    def from_core(cls, suggestion: core.CourseSuggestion) -> "CourseSuggestion":
        return cls(**asdict(suggestion))


# Request/Response models for REST API endpoints

class NormalizeGradeRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    raw_value: t.Optional[str] = None


class CalculateGpaRequest(BaseModel):
    letters: list[str] = Field(default_factory=list)


class CalculateGpaResponse(BaseModel):
    gpa: float


class AggregateProgressRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    records: list[GradeRecord] = Field(default_factory=list)
    decrypted: dict[str, t.Optional[str]] = Field(default_factory=dict)
    degree_total_courses: t.Optional[int] = None


class ShowProgressSummaryResponse(BaseModel):
    summary: str


class ExportReportRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    records: list[GradeRecord] = Field(default_factory=list)
    decrypted: dict[str, t.Optional[str]] = Field(default_factory=dict)
    student: StudentInfo
    projected_graduation: t.Optional[str] = None  # computed from the records when omitted
    degree_total_courses: t.Optional[int] = None


class ProjectGraduationRequest(BaseModel):
    remaining_courses: int
    current_term: str
    current_year: int
    courses_per_term: t.Optional[int] = None


class ProjectGraduationResponse(BaseModel):
    projected_term: str


class SuggestCoursesRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    requirements: list[CourseRequirement] = Field(default_factory=list)
    records: list[GradeRecord] = Field(default_factory=list)
    prerequisites: list[Prerequisite] = Field(default_factory=list)
    decrypted: dict[str, t.Optional[str]] = Field(default_factory=dict)
    limit: int = 5
