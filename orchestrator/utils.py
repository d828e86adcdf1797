"""Utility functions for the orchestrator."""
import json
import typing as t
from pathlib import Path

from rich.console import Console

from academic_progress.errors import MalformedRecordError
from academic_progress.models import GradeRecord

console = Console()
err_console = Console(stderr=True)


def load_snapshot(path_str: str) -> tuple[list[GradeRecord], dict[str, t.Optional[str]], dict[str, t.Any]]:
    """Load a grade snapshot file.

    The file is a JSON object with a "records" list of backend rows, an
    optional "decrypted" mapping of record id to grade value and an optional
    "student" object (name, student_id, program).

    Args:
        path_str: Path to the snapshot JSON file

    Returns:
        Tuple of (records, decrypted, student)

    Raises:
        SystemExit: If the file is not valid JSON or a record is malformed
    """
    path = Path(path_str)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        err_console.print(f"[red]Error:[/red] '{path_str}' is not valid JSON: {e}")
        raise SystemExit(1)

    if not isinstance(data, dict) or not isinstance(data.get("records", []), list):
        err_console.print(f"[red]Error:[/red] '{path_str}' must be an object with a \"records\" list.")
        raise SystemExit(1)

    try:
        records = [GradeRecord.from_mapping(row) for row in data.get("records", [])]
    except MalformedRecordError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    decrypted = {str(key): value for key, value in (data.get("decrypted") or {}).items()}
    return records, decrypted, dict(data.get("student") or {})


def resolve_export_path(export: str, default_name: str) -> Path:
    """Return the file to write: ``export`` itself, or ``default_name`` inside it when it is a directory."""
    path = Path(export)
    if path.is_dir():
        return path / default_name
    return path
