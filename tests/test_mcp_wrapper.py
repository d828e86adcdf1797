# -*- coding: utf-8 -*-
"""Tests for the progress service MCP wrapper, with HTTP served by httpx.MockTransport."""
import json
import typing as t

import httpx
import pytest

from academic_progress.models import StudentInfo
from mcp_wrappers.progress import mcp_service
from services.shared.models import ProgressSummary

RealClient = httpx.Client


@pytest.fixture
def requests_seen() -> list[httpx.Request]:
    return []


def install_transport(monkeypatch, requests_seen: list, handler: t.Callable[[httpx.Request], httpx.Response]) -> None:
    """Route the wrapper's httpx.Client through a MockTransport."""
    def recording_handler(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        return handler(request)

    def client_factory(timeout: float) -> httpx.Client:
        return RealClient(transport=httpx.MockTransport(recording_handler), timeout=timeout)

    monkeypatch.setattr(mcp_service.httpx, "Client", client_factory)


def test_aggregate_progress_posts_records(monkeypatch, requests_seen, example_records) -> None:
    summary = {
        "overall_gpa": 2.0,
        "term_gpas": {"2023-Fall": 4.0, "2024-Winter": 0.0, "2024-Fall": 0.0},
        "year_gpas": {"2023": 4.0, "2024": 0.0},
        "completed_courses": 2,
        "in_progress_courses": 1,
        "total_courses": 3,
        "remaining_courses": 37,
        "percent_complete": 5,
        "percent_in_progress": 3,
        "numerical_average": 70.0,
        "unresolved_courses": [],
    }
    install_transport(monkeypatch, requests_seen, lambda request: httpx.Response(200, json=summary))

    result = mcp_service._aggregate_progress(example_records, {"r1": "95"})

    assert isinstance(result, ProgressSummary)
    assert result.percent_complete == 5
    assert result.to_core().term_gpas[(2023, "Fall")] == 4.0

    request = requests_seen[0]
    assert request.method == "POST"
    assert str(request.url) == f"{mcp_service.PROGRESS_SERVICE_URL}/progress:aggregate"
    body = json.loads(request.content)
    assert [record["id"] for record in body["records"]] == ["r1", "r2", "r3"]
    assert body["decrypted"] == {"r1": "95"}


def test_calculate_gpa(monkeypatch, requests_seen) -> None:
    install_transport(monkeypatch, requests_seen, lambda request: httpx.Response(200, json={"gpa": 3.5}))

    assert mcp_service._calculate_gpa(["A", "B"]) == 3.5
    assert json.loads(requests_seen[0].content) == {"letters": ["A", "B"]}


def test_project_graduation(monkeypatch, requests_seen) -> None:
    install_transport(monkeypatch, requests_seen,
                      lambda request: httpx.Response(200, json={"projected_term": "Winter 2026"}))

    assert mcp_service._project_graduation(12, "Fall", 2024, 4) == "Winter 2026"
    assert json.loads(requests_seen[0].content) == {
        "remaining_courses": 12, "current_term": "Fall", "current_year": 2024, "courses_per_term": 4,
    }


def test_export_returns_pdf_bytes(monkeypatch, requests_seen, example_records) -> None:
    install_transport(monkeypatch, requests_seen,
                      lambda request: httpx.Response(200, content=b"%PDF-1.4 stub",
                                                     headers={"content-type": "application/pdf"}))

    pdf_bytes = mcp_service._export_progress_report(example_records, {}, StudentInfo("Jordan Lee", "1001"))

    assert pdf_bytes == b"%PDF-1.4 stub"
    assert json.loads(requests_seen[0].content)["student"] == {
        "name": "Jordan Lee", "student_id": "1001", "program": None,
    }


def test_http_error_becomes_runtime_error(monkeypatch, requests_seen) -> None:
    install_transport(monkeypatch, requests_seen,
                      lambda request: httpx.Response(400, json={"detail": "Unknown letter grade 'Z'"}))

    with pytest.raises(RuntimeError, match="HTTP error from progress service: 400"):
        mcp_service._calculate_gpa(["Z"])


def test_timeout_becomes_runtime_error(monkeypatch, requests_seen) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    install_transport(monkeypatch, requests_seen, handler)

    with pytest.raises(RuntimeError, match="timed out"):
        mcp_service._normalize_grade("85")


def test_connection_error_becomes_runtime_error(monkeypatch, requests_seen) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    install_transport(monkeypatch, requests_seen, handler)

    with pytest.raises(RuntimeError, match="Error calling progress service"):
        mcp_service._show_progress_summary([])
