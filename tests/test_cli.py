# -*- coding: utf-8 -*-
"""Tests for the progress CLI."""
import json
from pathlib import Path

import httpx
from click.testing import CliRunner
from fastapi.testclient import TestClient

from mcp_wrappers.progress import mcp_service
from orchestrator.run import main
from services.progress_service.app import app


def _write_snapshot(tmp_path: Path, snapshot: dict) -> str:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot), encoding="utf-8")
    return str(path)


def test_shows_progress(tmp_path, snapshot_rows) -> None:
    result = CliRunner().invoke(main, [_write_snapshot(tmp_path, snapshot_rows)])

    assert result.exit_code == 0, result.output
    assert "5% Complete (+3% In Progress)" in result.output
    assert "Jordan Lee (1001)" in result.output
    assert "88 (A)" in result.output
    assert "Fall 2028" in result.output


def test_exports_pdf_into_directory(tmp_path, snapshot_rows) -> None:
    out_dir = tmp_path / "reports"
    out_dir.mkdir()
    result = CliRunner().invoke(main, [_write_snapshot(tmp_path, snapshot_rows), "--export", str(out_dir)])

    assert result.exit_code == 0, result.output
    pdf_path = out_dir / "academic_progress_1001.pdf"
    assert pdf_path.read_bytes().startswith(b"%PDF")


def test_command_line_identity_overrides_snapshot(tmp_path, snapshot_rows) -> None:
    export = tmp_path / "report.pdf"
    result = CliRunner().invoke(main, [
        _write_snapshot(tmp_path, snapshot_rows),
        "--name", "Sam Park", "--student-id", "2002", "--courses-per-term", "10",
        "--export", str(export),
    ])

    assert result.exit_code == 0, result.output
    assert "Sam Park (2002)" in result.output
    # 37 remaining at 10 per regular term after Fall 2024: 4 terms
    assert "Fall 2026" in result.output
    assert export.is_file()


def test_malformed_record_exits_with_error(tmp_path, snapshot_rows) -> None:
    del snapshot_rows["records"][0]["year"]
    result = CliRunner().invoke(main, [_write_snapshot(tmp_path, snapshot_rows)])

    assert result.exit_code == 1


def test_missing_snapshot_argument() -> None:
    result = CliRunner().invoke(main, [])
    assert result.exit_code == 1


def test_list_tool_schemas() -> None:
    result = CliRunner().invoke(main, ["--list"])

    assert result.exit_code == 0, result.output
    assert "aggregate_progress" in result.output
    assert "get_gateway_info" in result.output


def test_remote_mode_goes_through_the_service(tmp_path, snapshot_rows, monkeypatch) -> None:
    """--remote sends the snapshot, numeric grades included, to the service and exports its PDF."""
    real_post = mcp_service._post
    paths = []

    def recording_post(path: str, payload: dict, timeout: float = mcp_service.DEFAULT_TIMEOUT) -> httpx.Response:
        paths.append(path)
        return real_post(path, payload, timeout)

    monkeypatch.setattr(mcp_service, "_post", recording_post)
    monkeypatch.setattr(mcp_service.httpx, "Client",
                        lambda timeout: TestClient(app, base_url=mcp_service.PROGRESS_SERVICE_URL))
    snapshot_rows["decrypted"]["g1"] = 88
    export = tmp_path / "remote.pdf"

    result = CliRunner().invoke(main, [_write_snapshot(tmp_path, snapshot_rows), "--remote", "--export", str(export)])

    assert result.exit_code == 0, result.output
    assert "5% Complete (+3% In Progress)" in result.output
    assert "88 (A)" in result.output
    assert "Fall 2028" in result.output
    assert export.read_bytes().startswith(b"%PDF")
    assert paths == ["/progress:aggregate", "/graduation:project", "/progress/export"]


def test_remote_mode_reports_unreachable_service(tmp_path, snapshot_rows, monkeypatch) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    real_client = httpx.Client
    monkeypatch.setattr(mcp_service.httpx, "Client",
                        lambda timeout: real_client(transport=httpx.MockTransport(refuse), timeout=timeout))

    result = CliRunner().invoke(main, [_write_snapshot(tmp_path, snapshot_rows), "--remote"])

    assert result.exit_code == 1
    assert "Error calling progress service" in result.output
