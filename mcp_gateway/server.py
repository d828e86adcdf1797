"""
MCP Gateway Server - Unified entry point for the distributed progress service.

This server imports the progress MCP wrapper and provides a single interface
for its tools, plus gateway introspection tools. Tool calls are routed to the
progress service via HTTP.
"""
from __future__ import annotations

import typing as t

from fastmcp import FastMCP

# Import the raw functions from the MCP wrapper (not the decorated versions)
# This allows us to register them with our own unified FastMCP instance
from mcp_wrappers.progress.mcp_service import (
    _normalize_grade, _calculate_gpa, _aggregate_progress, _show_progress_summary,
    _project_graduation, _suggest_courses,
    PROGRESS_SERVICE_URL
)

# Import models for type hints
from academic_progress.models import CourseRequirement, GradeRecord, Prerequisite
from academic_progress.requirements import DEFAULT_SUGGESTION_LIMIT
from services.shared.models import (
    CanonicalGrade as PydanticCanonicalGrade,
    CourseSuggestion as PydanticCourseSuggestion,
    ProgressSummary as PydanticProgressSummary,
)

# Create the unified MCP server
mcp = FastMCP("ProgressDistributedGateway")

TOOL_DESCRIPTIONS: dict[str, list[str]] = {
    "progress_service": [
        "normalize_grade - Map a raw grade to its canonical letter and numeric estimate",
        "calculate_gpa - Unweighted 4.0-scale GPA of a list of letters",
        "aggregate_progress - Summarize GPAs, course counts and completion percentages",
        "show_progress_summary - Display formatted degree progress by year",
        "project_graduation - Project the graduation term from the remaining load",
        "suggest_courses - Suggest required courses whose prerequisites are met",
    ],
    "gateway_tools": [
        "get_gateway_info - Get gateway and service status information",
        "list_available_tools - List all available tools by service",
    ],
}


def get_service_status() -> dict[str, str]:
    """
    Get the status of the distributed services.

    Reports the configured service URL to help with debugging and service
    discovery.
    """
    return {
        "progress_service": PROGRESS_SERVICE_URL,
        "gateway_status": "running"
    }


# Progress Service Tools
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


@mcp.tool()
def get_gateway_info() -> dict[str, str]:
    """
    Get information about the MCP Gateway and connected services.

    This tool provides status information about the gateway and the
    URL of the progress service it connects to.
    """
    return get_service_status()


@mcp.tool()
def list_available_tools() -> dict[str, list[str]]:
    """
    List all available tools organized by service.
    """
    return {name: list(tools) for name, tools in TOOL_DESCRIPTIONS.items()}


if __name__ == "__main__":
    print("🌟 Starting MCP Gateway Server")
    print("📋 Available Services:")

    status = get_service_status()
    for service_name, service_url in status.items():
        if service_name != "gateway_status":
            print(f"  • {service_name}: {service_url}")

    print(f"\n🚀 Gateway Status: {status['gateway_status']}")
    print("\nTools available:")
    for service_name, tool_list in TOOL_DESCRIPTIONS.items():
        print(f"\n📦 {service_name}:")
        for tool in tool_list:
            print(f"    - {tool}")

    print(f"\n🌐 Starting MCP server...")
    mcp.run()
