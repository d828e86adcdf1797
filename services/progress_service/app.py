"""
FastAPI service for degree progress operations.

This service exposes the academic_progress library as REST API endpoints:
grade normalization, GPA, progress aggregation, the text summary, the PDF
report, graduation projection and course suggestions. All operations are
pure computations over the grade snapshot sent with each request.
"""
from __future__ import annotations

import dataclasses
import logging
import typing as t
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Response

from academic_progress.aggregator import aggregate
from academic_progress.config import GradingConfig, load_config
from academic_progress.errors import MalformedRecordError
from academic_progress.gpa import calculate_gpa
from academic_progress.normalizer import normalize
from academic_progress.pdf_export import build_progress_report_pdf, report_filename
from academic_progress.projection import latest_term, project_graduation
from academic_progress.report import format_progress_summary
from academic_progress.requirements import suggest_courses
from services.shared.models import (
    AggregateProgressRequest,
    CalculateGpaRequest,
    CalculateGpaResponse,
    CanonicalGrade,
    CourseSuggestion,
    ExportReportRequest,
    NormalizeGradeRequest,
    ProgressSummary,
    ProjectGraduationRequest,
    ProjectGraduationResponse,
    ShowProgressSummaryResponse,
    SuggestCoursesRequest,
)

logger = logging.getLogger(__name__)

# Grading rules - loaded from the environment on startup
config: GradingConfig = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize resources on startup and cleanup on shutdown."""
    global config

    config = load_config()
    logger.info(
        "Progress service ready: degree total %d course(s), %d course(s) per term, regular terms %s",
        config.degree_total_courses, config.courses_per_term, ", ".join(config.regular_terms),
    )

    yield


app = FastAPI(
    title="Progress Service",
    description="REST API for grade normalization, GPA and degree progress reporting",
    version="1.0.0",
    lifespan=lifespan,
)


def _config_for(degree_total_courses: t.Optional[int] = None) -> GradingConfig:
    base = config or load_config()
    if degree_total_courses is None:
        return base
    try:
        return dataclasses.replace(base, degree_total_courses=degree_total_courses)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _raise_http(action: str, e: Exception) -> t.NoReturn:
    if isinstance(e, HTTPException):
        raise e
    if isinstance(e, MalformedRecordError):
        raise HTTPException(status_code=422, detail=str(e))
    if isinstance(e, ValueError):
        raise HTTPException(status_code=400, detail=str(e))
    logger.exception("Error %s", action)
    raise HTTPException(status_code=500, detail=f"Error {action}: {str(e)}")


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "service": "progress-service"}


@app.post("/grades:normalize", response_model=CanonicalGrade)
async def normalize_grade(request: NormalizeGradeRequest) -> CanonicalGrade:
    """Map a raw grade value to a canonical letter and numeric estimate."""
    try:
        return CanonicalGrade.from_core(normalize(request.raw_value, _config_for()))
    except Exception as e:
        _raise_http("normalizing grade", e)


@app.post("/gpa", response_model=CalculateGpaResponse)
async def gpa(request: CalculateGpaRequest) -> CalculateGpaResponse:
    """Unweighted 4.0-scale GPA of a list of letters. Unknown letters are rejected with 400."""
    try:
        return CalculateGpaResponse(gpa=calculate_gpa(request.letters, _config_for()))
    except Exception as e:
        _raise_http("calculating GPA", e)


@app.post("/progress:aggregate", response_model=ProgressSummary)
async def aggregate_progress(request: AggregateProgressRequest) -> ProgressSummary:
    """Summarize degree progress for a snapshot of grade records."""
    try:
        records = [record.to_core() for record in request.records]
        summary = aggregate(records, request.decrypted, _config_for(request.degree_total_courses))
        return ProgressSummary.from_core(summary)
    except Exception as e:
        _raise_http("aggregating progress", e)


@app.post("/progress/summary", response_model=ShowProgressSummaryResponse)
async def show_progress_summary(request: AggregateProgressRequest) -> ShowProgressSummaryResponse:
    """Progress summary and per-year course tables as formatted text."""
    try:
        grading = _config_for(request.degree_total_courses)
        records = [record.to_core() for record in request.records]
        summary = aggregate(records, request.decrypted, grading)
        text = format_progress_summary(summary, records, request.decrypted, grading)
        return ShowProgressSummaryResponse(summary=text)
    except Exception as e:
        _raise_http("generating progress summary", e)


@app.post("/progress/export")
async def export_progress_report(request: ExportReportRequest) -> Response:
    """
    Render the Academic Progress Report as a PDF download.

    When no projected graduation is supplied it is projected from the most
    recent term on record.
    """
    try:
        grading = _config_for(request.degree_total_courses)
        records = [record.to_core() for record in request.records]
        summary = aggregate(records, request.decrypted, grading)

        projected = request.projected_graduation
        if projected is None:
            current = latest_term(records)
            if current is not None:
                term, year = current
                projected = project_graduation(summary.remaining_courses, None, term, year, grading)

        pdf_bytes = build_progress_report_pdf(
            records,
            request.decrypted,
            request.student.to_core(),
            summary=summary,
            projected_graduation=projected,
            config=grading,
        )
    except Exception as e:
        _raise_http("exporting progress report", e)

    filename = report_filename(request.student.student_id)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.post("/graduation:project", response_model=ProjectGraduationResponse)
async def project_graduation_term(request: ProjectGraduationRequest) -> ProjectGraduationResponse:
    """Project the term in which the remaining courses will be finished."""
    try:
        projected = project_graduation(
            request.remaining_courses,
            request.courses_per_term,
            request.current_term,
            request.current_year,
            _config_for(),
        )
        return ProjectGraduationResponse(projected_term=projected)
    except Exception as e:
        _raise_http("projecting graduation", e)


@app.post("/courses:suggest", response_model=list[CourseSuggestion])
async def suggest_next_courses(request: SuggestCoursesRequest) -> list[CourseSuggestion]:
    """Required courses the student can take next, earliest program year first."""
    try:
        suggestions = suggest_courses(
            [requirement.to_core() for requirement in request.requirements],
            [record.to_core() for record in request.records],
            [prereq.to_core() for prereq in request.prerequisites],
            decrypted=request.decrypted,
            limit=request.limit,
            config=_config_for(),
        )
        return [CourseSuggestion.from_core(suggestion) for suggestion in suggestions]
    except Exception as e:
        _raise_http("suggesting courses", e)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8004)
