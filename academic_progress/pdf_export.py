# -*- coding: utf-8 -*-
"""
PDF export of the Academic Progress Report.

Layout: title, degree progress bar, student information, academic summary,
then one grades table per year (most recent first). Every page carries a
confidentiality footer with the page count.
"""
from __future__ import annotations

import logging
import typing as t
from datetime import date
from functools import partial
from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.graphics.shapes import Drawing, Rect
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .aggregator import aggregate, resolve_raw_value
from .config import DEFAULT_CONFIG, GradingConfig
from .models import GradeRecord, ProgressSummary, StudentInfo
from .report import grade_display, group_by_year, progress_line, status_label

logger = logging.getLogger(__name__)

APP_NAME = "CourseMix"
CONFIDENTIALITY_NOTICE = "This report is confidential and intended for the student's personal use only."

HEADING_COLOR = colors.Color(39 / 255, 55 / 255, 77 / 255)
COMPLETED_COLOR = colors.HexColor("#2a7d7d")
IN_PROGRESS_COLOR = colors.HexColor("#4a7aef")
TRACK_COLOR = colors.Color(225 / 255, 225 / 255, 225 / 255)
BOX_COLOR = colors.Color(250 / 255, 250 / 255, 250 / 255)
BOX_BORDER_COLOR = colors.Color(230 / 255, 230 / 255, 230 / 255)
ALT_ROW_COLOR = colors.Color(245 / 255, 245 / 255, 245 / 255)
SUMMARY_FILLS = (
    colors.Color(237 / 255, 242 / 255, 247 / 255),  # GPA
    colors.Color(237 / 255, 247 / 255, 242 / 255),  # completed
    colors.Color(242 / 255, 240 / 255, 247 / 255),  # in progress
)

CONTENT_WIDTH = 170 * mm
BAR_HEIGHT = 10 * mm


def report_filename(student_id: str) -> str:
    return f"academic_progress_{student_id}.pdf"


def format_report_date(day: date) -> str:
    return f"{day.month}/{day.day}/{day.year}"


class _NumberedCanvas(canvas.Canvas):
    """Canvas that defers page output so each footer can show the total page count."""

    def __init__(self, *args, report_date: str = "", **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._report_date = report_date
        self._saved_page_states: list[dict] = []

    def showPage(self) -> None:
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self) -> None:
        page_count = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_footer(page_count)
            super().showPage()
        super().save()

    def _draw_footer(self, page_count: int) -> None:
        page_width, _ = self._pagesize
        self.saveState()
        self.setFont("Helvetica", 8)
        self.setFillColor(colors.Color(100 / 255, 100 / 255, 100 / 255))
        self.drawCentredString(page_width / 2, 10 * mm, CONFIDENTIALITY_NOTICE)
        self.drawCentredString(
            page_width / 2,
            5 * mm,
            f"Generated on {self._report_date} by {APP_NAME} | Page {self._pageNumber} of {page_count}",
        )
        self.restoreState()


def _progress_bar(percent_complete: int, percent_in_progress: int) -> Drawing:
    radius = BAR_HEIGHT / 2
    drawing = Drawing(CONTENT_WIDTH, BAR_HEIGHT)
    drawing.add(Rect(0, 0, CONTENT_WIDTH, BAR_HEIGHT, rx=radius, ry=radius,
                     fillColor=TRACK_COLOR, strokeColor=None))

    completed_width = percent_complete / 100 * CONTENT_WIDTH
    if percent_complete > 0:
        drawing.add(Rect(0, 0, completed_width, BAR_HEIGHT, rx=radius, ry=radius,
                         fillColor=COMPLETED_COLOR, strokeColor=None))
    if percent_in_progress > 0:
        drawing.add(Rect(completed_width, 0, percent_in_progress / 100 * CONTENT_WIDTH, BAR_HEIGHT,
                         rx=radius, ry=radius, fillColor=IN_PROGRESS_COLOR, strokeColor=None))
    return drawing


def _boxed(rows: list[list[t.Any]], background: colors.Color) -> Table:
    box = Table(rows, colWidths=[CONTENT_WIDTH])
    box.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, -1), background),
        ("BOX", (0, 0), (-1, -1), 0.5, BOX_BORDER_COLOR),
        ("LEFTPADDING", (0, 0), (-1, -1), 10),
        ("RIGHTPADDING", (0, 0), (-1, -1), 10),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]))
    return box


def _summary_row(summary: ProgressSummary, label_style: ParagraphStyle, value_style: ParagraphStyle) -> Table:
    cells = [
        ("Overall GPA", f"{summary.overall_gpa:.2f} / 4.0"),
        ("Completed", f"{summary.completed_courses} courses"),
        ("In Progress", f"{summary.in_progress_courses} courses"),
    ]
    row = [[Paragraph(label, label_style), Paragraph(value, value_style)] for label, value in cells]
    grid = Table([row], colWidths=[(CONTENT_WIDTH - 20) / 3] * 3)
    style = [
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("TOPPADDING", (0, 0), (-1, -1), 6),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 10),
    ]
    for column, fill in enumerate(SUMMARY_FILLS):
        style.append(("BACKGROUND", (column, 0), (column, 0), fill))
    grid.setStyle(TableStyle(style))
    return grid


def _grades_table(rows: list[list[str]]) -> Table:
    table = Table(
        [["Course Code", "Grade", "Status"]] + rows,
        colWidths=[CONTENT_WIDTH / 3] * 3,
        repeatRows=1,
    )
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), HEADING_COLOR),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 10),
        ("ALIGN", (0, 0), (-1, -1), "LEFT"),
        ("GRID", (0, 0), (-1, -1), 0.1, colors.Color(200 / 255, 200 / 255, 200 / 255)),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, ALT_ROW_COLOR]),
        ("TOPPADDING", (0, 0), (-1, -1), 6),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
    ]))
    return table


def build_progress_report_pdf(
        records: t.Sequence[GradeRecord],
        decrypted: t.Optional[t.Mapping[str, t.Optional[str]]],
        student: StudentInfo,
        summary: t.Optional[ProgressSummary] = None,
        projected_graduation: t.Optional[str] = None,
        report_date: t.Optional[date] = None,
        config: t.Optional[GradingConfig] = None,
) -> bytes:
    """Render the Academic Progress Report.

    :param records: The student's grade records.
    :param decrypted: Mapping of record id to decrypted grade value.
    :param student: Name, student ID and program printed in the header.
    :param summary: Precomputed summary; aggregated from ``records`` when omitted.
    :param projected_graduation: Display term, e.g. "Winter 2027".
    :param report_date: Date printed on the report; defaults to today.
    :param config: Grading rules; defaults to DEFAULT_CONFIG.
    :return: The PDF document as bytes.
    """
    config = config or DEFAULT_CONFIG
    if summary is None:
        summary = aggregate(records, decrypted, config)
    report_day = format_report_date(report_date or date.today())

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle("ReportTitle", parent=styles["Title"], fontSize=22, leading=26,
                                 alignment=TA_CENTER, textColor=HEADING_COLOR)
    section_style = ParagraphStyle("Section", parent=styles["Heading2"], fontSize=14, leading=18,
                                   textColor=HEADING_COLOR, spaceBefore=4, spaceAfter=4)
    label_style = ParagraphStyle("Label", parent=styles["Normal"], fontSize=12, textColor=HEADING_COLOR)
    body_style = ParagraphStyle("Body", parent=styles["Normal"], fontSize=11, leading=15,
                                textColor=colors.Color(60 / 255, 60 / 255, 60 / 255))
    small_style = ParagraphStyle("Small", parent=styles["Normal"], fontSize=10,
                                 textColor=colors.Color(50 / 255, 50 / 255, 50 / 255))
    box_label_style = ParagraphStyle("BoxLabel", parent=styles["Normal"], fontSize=9,
                                     textColor=colors.Color(100 / 255, 100 / 255, 100 / 255))
    box_value_style = ParagraphStyle("BoxValue", parent=styles["Normal"], fontSize=14, leading=18)

    story: list[t.Any] = []
    story.append(Paragraph("Academic Progress Report", title_style))
    story.append(Spacer(1, 4 * mm))

    # Degree progress
    story.append(Paragraph("Degree Progress", label_style))
    story.append(Spacer(1, 2 * mm))
    story.append(_progress_bar(summary.percent_complete, summary.percent_in_progress))
    story.append(Spacer(1, 2 * mm))
    story.append(Paragraph(progress_line(summary), small_style))
    story.append(Spacer(1, 6 * mm))

    # Student information
    info_rows = [
        [Paragraph("Student Information", section_style)],
        [Paragraph(f"Name: {escape(student.name)}", body_style)],
        [Paragraph(f"Student ID: {escape(student.student_id)}", body_style)],
        [Paragraph(f"Program: {escape(student.program or 'Not specified')}", body_style)],
        [Paragraph(f"Projected Graduation: {escape(projected_graduation or 'Not determined')}", body_style)],
        [Paragraph(f"Report Date: {report_day}", body_style)],
    ]
    story.append(_boxed(info_rows, BOX_COLOR))
    story.append(Spacer(1, 6 * mm))

    # Academic summary
    summary_rows = [
        [Paragraph("Academic Summary", section_style)],
        [_summary_row(summary, box_label_style, box_value_style)],
    ]
    story.append(_boxed(summary_rows, BOX_COLOR))
    story.append(Spacer(1, 8 * mm))

    # Grades by year
    story.append(Paragraph("Grades", ParagraphStyle("Grades", parent=section_style, fontSize=16)))
    for year_records in group_by_year(records).values():
        rows = [
            [
                record.course_code,
                grade_display(record, resolve_raw_value(record, decrypted), config),
                status_label(record.status),
            ]
            for record in year_records
        ]
        story.append(_grades_table(rows))
        story.append(Spacer(1, 6 * mm))

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=20 * mm,
        rightMargin=20 * mm,
        topMargin=15 * mm,
        bottomMargin=20 * mm,
        title="Academic Progress Report",
        author=APP_NAME,
    )
    doc.build(story, canvasmaker=partial(_NumberedCanvas, report_date=report_day))

    pdf_bytes = buffer.getvalue()
    logger.info("Generated progress report for %s: %d course(s), %d bytes",
                student.student_id, len(records), len(pdf_bytes))
    return pdf_bytes
