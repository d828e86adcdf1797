"""
MCP wrapper for the progress service.

This module keeps the tool signatures of academic_progress/server.py but makes
HTTP calls to the distributed progress service. It handles serialization
between the dataclass models and the Pydantic request models, and converts
transport failures into RuntimeError.
"""
from __future__ import annotations

import logging
import os
import typing as t
from dataclasses import asdict

import httpx
from fastmcp import FastMCP

# Import dataclass models for MCP interface compatibility
from academic_progress.models import CourseRequirement, GradeRecord, Prerequisite, StudentInfo
from academic_progress.requirements import DEFAULT_SUGGESTION_LIMIT
# Import Pydantic models for HTTP serialization
from services.shared.models import (
    AggregateProgressRequest,
    CalculateGpaRequest,
    CalculateGpaResponse,
    CanonicalGrade as PydanticCanonicalGrade,
    CourseRequirement as PydanticCourseRequirement,
    CourseSuggestion as PydanticCourseSuggestion,
    ExportReportRequest,
    GradeRecord as PydanticGradeRecord,
    NormalizeGradeRequest,
    Prerequisite as PydanticPrerequisite,
    ProgressSummary as PydanticProgressSummary,
    ProjectGraduationRequest,
    ProjectGraduationResponse,
    ShowProgressSummaryResponse,
    StudentInfo as PydanticStudentInfo,
    SuggestCoursesRequest,
)

logger = logging.getLogger(__name__)

mcp = FastMCP("ProgressMCPWrapper")

# Service URL - configurable via environment variable
PROGRESS_SERVICE_URL = os.getenv("PROGRESS_SERVICE_URL", "http://localhost:8004")

# Timeout settings (in seconds)
DEFAULT_TIMEOUT = 30.0
EXPORT_TIMEOUT = 60.0  # PDF rendering for long transcripts


def _post(path: str, payload: dict[str, t.Any], timeout: float = DEFAULT_TIMEOUT) -> httpx.Response:
    """POST a JSON body to the progress service, mapping transport failures to RuntimeError."""
    url = f"{PROGRESS_SERVICE_URL}{path}"
    logger.debug("POST %s", url)
    try:
        with httpx.Client(timeout=timeout) as client:
            response = client.post(url, json=payload)
            response.raise_for_status()
        return response
    except httpx.TimeoutException:
        raise RuntimeError(f"Progress service call to {path} timed out after {timeout} seconds")
    except httpx.HTTPStatusError as e:
        raise RuntimeError(f"HTTP error from progress service: {e.response.status_code} {e.response.text}")
    except Exception as e:
        raise RuntimeError(f"Error calling progress service: {str(e)}")


def _records_payload(records: t.Sequence[GradeRecord]) -> list[PydanticGradeRecord]:
    return [PydanticGradeRecord(**asdict(record)) for record in records]


def _normalize_grade(raw_value: t.Optional[str]) -> PydanticCanonicalGrade:
    """Map a raw grade to its canonical letter and numeric estimate."""
    request = NormalizeGradeRequest(raw_value=raw_value)
    response = _post("/grades:normalize", request.model_dump())
    return PydanticCanonicalGrade(**response.json())


def _calculate_gpa(letters: list[str]) -> float:
    """Unweighted GPA on the 4.0 scale."""
    request = CalculateGpaRequest(letters=list(letters))
    response = _post("/gpa", request.model_dump())
    return CalculateGpaResponse(**response.json()).gpa


def _aggregate_progress(
        records: list[GradeRecord],
        decrypted: t.Optional[dict[str, t.Optional[str]]] = None,
) -> PydanticProgressSummary:
    """Summarize degree progress for a snapshot of grade records."""
    request = AggregateProgressRequest(records=_records_payload(records), decrypted=decrypted or {})
    response = _post("/progress:aggregate", request.model_dump())
    return PydanticProgressSummary(**response.json())


def _show_progress_summary(
        records: list[GradeRecord],
        decrypted: t.Optional[dict[str, t.Optional[str]]] = None,
) -> str:
    """Display degree progress and the course list grouped by year.

    Args:
        records: The student's grade records.
        decrypted: Mapping of record id to decrypted grade value.

    Returns:
        Formatted string showing the progress summary and course tables.
    """
    request = AggregateProgressRequest(records=_records_payload(records), decrypted=decrypted or {})
    response = _post("/progress/summary", request.model_dump())
    return ShowProgressSummaryResponse(**response.json()).summary


def _export_progress_report(
        records: list[GradeRecord],
        decrypted: t.Optional[dict[str, t.Optional[str]]],
        student: StudentInfo,
        projected_graduation: t.Optional[str] = None,
) -> bytes:
    """Render the Academic Progress Report on the service and return the PDF bytes."""
    request = ExportReportRequest(
        records=_records_payload(records),
        decrypted=decrypted or {},
        student=PydanticStudentInfo(**asdict(student)),
        projected_graduation=projected_graduation,
    )
    response = _post("/progress/export", request.model_dump(), timeout=EXPORT_TIMEOUT)
    return response.content


def _project_graduation(
        remaining_courses: int,
        current_term: str,
        current_year: int,
        courses_per_term: t.Optional[int] = None,
) -> str:
    """Project the graduation term from the remaining course load."""
    request = ProjectGraduationRequest(
        remaining_courses=remaining_courses,
        current_term=current_term,
        current_year=current_year,
        courses_per_term=courses_per_term,
    )
    response = _post("/graduation:project", request.model_dump())
    return ProjectGraduationResponse(**response.json()).projected_term


def _suggest_courses(
        requirements: list[CourseRequirement],
        records: list[GradeRecord],
        prerequisites: t.Optional[list[Prerequisite]] = None,
        decrypted: t.Optional[dict[str, t.Optional[str]]] = None,
        limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> list[PydanticCourseSuggestion]:
    """Suggest required courses whose prerequisites are completed."""
    request = SuggestCoursesRequest(
        requirements=[PydanticCourseRequirement(**asdict(requirement)) for requirement in requirements],
        records=_records_payload(records),
        prerequisites=[PydanticPrerequisite(**asdict(prereq)) for prereq in prerequisites or ()],
        decrypted=decrypted or {},
        limit=limit,
    )
    response = _post("/courses:suggest", request.model_dump())
    return [PydanticCourseSuggestion(**item) for item in response.json()]


# MCP tool wrappers that call the raw functions
@mcp.tool()
def normalize_grade(raw_value: t.Optional[str]) -> PydanticCanonicalGrade:
    """Map a raw grade (percentage or letter) to its canonical letter and numeric estimate."""
    return _normalize_grade(raw_value)


@mcp.tool()
def calculate_gpa(letters: list[str]) -> float:
    """Unweighted GPA on the 4.0 scale."""
    return _calculate_gpa(letters)


@mcp.tool()
def aggregate_progress(
        records: list[GradeRecord],
        decrypted: t.Optional[dict[str, t.Optional[str]]] = None,
) -> PydanticProgressSummary:
    """Summarize degree progress: GPAs by term and year, course counts and completion percentages."""
    return _aggregate_progress(records, decrypted)


@mcp.tool()
def show_progress_summary(
        records: list[GradeRecord],
        decrypted: t.Optional[dict[str, t.Optional[str]]] = None,
) -> str:
    """Display degree progress and the course list grouped by year."""
    return _show_progress_summary(records, decrypted)


@mcp.tool()
def project_graduation(
        remaining_courses: int,
        current_term: str,
        current_year: int,
        courses_per_term: t.Optional[int] = None,
) -> str:
    """Project the graduation term from the remaining course load."""
    return _project_graduation(remaining_courses, current_term, current_year, courses_per_term)


@mcp.tool()
def suggest_courses(
        requirements: list[CourseRequirement],
        records: list[GradeRecord],
        prerequisites: t.Optional[list[Prerequisite]] = None,
        decrypted: t.Optional[dict[str, t.Optional[str]]] = None,
        limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> list[PydanticCourseSuggestion]:
    """Suggest required courses whose prerequisites are completed, earliest program year first."""
    return _suggest_courses(requirements, records, prerequisites, decrypted, limit)
