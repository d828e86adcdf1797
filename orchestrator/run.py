# -*- coding: utf-8 -*-
import asyncio
import dataclasses
import json
import logging
import typing as t

import click
from rich.json import JSON
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from academic_progress.aggregator import aggregate, resolve_raw_value
from academic_progress.config import GradingConfig, load_config
from academic_progress.models import GradeRecord, ProgressSummary, StudentInfo
from academic_progress.pdf_export import build_progress_report_pdf, report_filename
from academic_progress.projection import latest_term, project_graduation
from academic_progress.report import (average_band, gpa_band, grade_display, group_by_year, progress_line,
                                      status_label)
from orchestrator.utils import console, err_console, load_snapshot, resolve_export_path
from registry import list_tool_schemas

logger = logging.getLogger("orchestrator")


def configure_logging(verbose: bool) -> None:
    """Route log records through rich on the shared console."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True, show_path=verbose)],
        force=True,
    )


def display_verbose_json(title: str, data: t.Any) -> None:
    """Display JSON data in a rich panel."""
    console.print(Panel(JSON(json.dumps(data, indent=2, default=str)), title=f"📄 {title}", expand=True,
                        border_style="blue"))


def create_stats_panel(summary: ProgressSummary, projected: t.Optional[str]) -> Panel:
    """Create the statistics panel: progress, counts, GPA and average."""
    stats_text = Text()
    stats_text.append(progress_line(summary), style="bold cyan")
    stats_text.append("\n")
    stats_text.append("Completed: ", style="white")
    stats_text.append(f"{summary.completed_courses}", style="bold green")
    stats_text.append("   In progress: ", style="white")
    stats_text.append(f"{summary.in_progress_courses}", style="bold blue")
    stats_text.append("   Remaining: ", style="white")
    stats_text.append(f"{summary.remaining_courses}", style="bold yellow")
    stats_text.append("\n")
    stats_text.append("GPA (4.0 scale): ", style="white")
    stats_text.append(f"{summary.overall_gpa:.2f} ({gpa_band(summary.overall_gpa)})", style="bold green")
    stats_text.append("\n")
    stats_text.append("Numerical average: ", style="white")
    stats_text.append(f"{summary.numerical_average:.1f}% ({average_band(summary.numerical_average)})",
                      style="bold green")
    stats_text.append("\n")
    stats_text.append("Projected graduation: ", style="white")
    stats_text.append(projected or "Not determined", style="bold magenta")
    if summary.unresolved_courses:
        stats_text.append("\n")
        stats_text.append(f"⚠ Grades unavailable for: {', '.join(summary.unresolved_courses)}", style="yellow")
    return Panel(stats_text, title="📊 Degree Progress", border_style="green")


def create_year_table(
        year: int,
        records: list[GradeRecord],
        summary: ProgressSummary,
        decrypted: dict[str, t.Optional[str]],
        config: GradingConfig,
) -> Table:
    """Create the course table for one year."""
    year_gpa = summary.year_gpas.get(year, 0.0)
    table = Table(title=f"📅 {year} (GPA {year_gpa:.2f})", show_header=True, header_style="bold magenta")
    table.add_column("Course", style="cyan")
    table.add_column("Term", style="white")
    table.add_column("Grade", style="yellow")
    table.add_column("Status", style="white")
    table.add_column("Term GPA", style="green", justify="right")

    for record in records:
        term_gpa = summary.term_gpas.get((record.year, record.term), 0.0)
        table.add_row(
            record.course_code,
            record.term,
            grade_display(record, resolve_raw_value(record, decrypted), config),
            status_label(record.status),
            f"{term_gpa:.2f}",
        )
    return table


def _summarize_remote(
        records: list[GradeRecord],
        decrypted: dict[str, t.Optional[str]],
) -> ProgressSummary:
    from mcp_wrappers.progress.mcp_service import _aggregate_progress

    return _aggregate_progress(records, decrypted).to_core()


def _project(summary: ProgressSummary, records: list[GradeRecord], config: GradingConfig,
             remote: bool) -> t.Optional[str]:
    current = latest_term(records)
    if current is None:
        return None
    term, year = current
    if remote:
        from mcp_wrappers.progress.mcp_service import _project_graduation

        return _project_graduation(summary.remaining_courses, term, year, config.courses_per_term)
    return project_graduation(summary.remaining_courses, None, term, year, config)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("snapshot", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("--export", "export_path", type=click.Path(), help="Write the PDF progress report to this file or directory.")
@click.option("--name", default=None, help="Student name printed on the report.")
@click.option("--student-id", default=None, help="Student ID printed on the report.")
@click.option("--program", default=None, help="Program printed on the report.")
@click.option("--courses-per-term", type=click.IntRange(min=1), default=None,
              help="Course load per regular term used for the graduation projection.")
@click.option("--remote", is_flag=True, help="Compute through the progress service instead of in-process.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--list", "list_tools", is_flag=True, help="List all tool schemas and exit.")
def main(
        snapshot: t.Optional[str],
        export_path: t.Optional[str],
        name: t.Optional[str],
        student_id: t.Optional[str],
        program: t.Optional[str],
        courses_per_term: t.Optional[int],
        remote: bool,
        verbose: bool,
        list_tools: bool,
) -> None:
    """Show degree progress for a grade snapshot and optionally export the PDF report.

    SNAPSHOT: JSON file with "records", "decrypted" and an optional "student".
    """
    configure_logging(verbose)

    # If list option is specified, display tool schemas and exit
    if list_tools:
        schemas = asyncio.run(list_tool_schemas())
        console.print(JSON(json.dumps(schemas, indent=2)))
        return

    if not snapshot:
        err_console.print("[red]Error:[/red] Provide a grade snapshot JSON file.")
        raise SystemExit(1)

    try:
        config = load_config()
        if courses_per_term is not None:
            config = dataclasses.replace(config, courses_per_term=courses_per_term)
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    records, decrypted, student_data = load_snapshot(snapshot)
    logger.debug("Loaded %d record(s) and %d decrypted value(s) from %s", len(records), len(decrypted), snapshot)

    try:
        with console.status("[bold green]Aggregating progress..."):
            if remote:
                summary = _summarize_remote(records, decrypted)
            else:
                summary = aggregate(records, decrypted, config)
            projected = _project(summary, records, config, remote)
    except (ValueError, RuntimeError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    if verbose:
        display_verbose_json("Progress Summary", {
            **dataclasses.asdict(summary),
            "term_gpas": {f"{year}-{term}": gpa for (year, term), gpa in summary.term_gpas.items()},
        })

    student = StudentInfo(
        name=name or student_data.get("name") or "Student",
        student_id=student_id or str(student_data.get("student_id") or "unknown"),
        program=program or student_data.get("program"),
    )

    console.print(
        Panel.fit(
            f"[bold blue]🎓 Academic Progress[/bold blue]\n"
            f"{student.name} ({student.student_id}) - [bold]{len(records)}[/bold] course record(s)",
            border_style="blue"
        )
    )
    console.print(create_stats_panel(summary, projected))

    if not records:
        console.print("📚 No courses recorded.")
    for year, year_records in group_by_year(records).items():
        console.print("\n", create_year_table(year, year_records, summary, decrypted, config))

    if export_path:
        target = resolve_export_path(export_path, report_filename(student.student_id))
        if remote:
            from mcp_wrappers.progress.mcp_service import _export_progress_report

            try:
                pdf_bytes = _export_progress_report(records, decrypted, student, projected)
            except RuntimeError as e:
                err_console.print(f"[red]Error:[/red] {e}")
                raise SystemExit(1)
        else:
            pdf_bytes = build_progress_report_pdf(
                records, decrypted, student, summary=summary, projected_graduation=projected, config=config,
            )
        target.write_bytes(pdf_bytes)
        console.print(f"\n[bold green]✅ Report written to {target}[/bold green]")


if __name__ == "__main__":
    main()
