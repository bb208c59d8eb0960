from fastapi import APIRouter
from fastapi.responses import StreamingResponse
from models import ExportRequest
from datetime import date
import csv
import io
import logging
import openpyxl

logger = logging.getLogger(__name__)

router = APIRouter()

COURSE_COLUMNS = [
    "id", "name", "semester", "grade", "course_type", "is_transfer", "institution_name",
    "credits", "original_credits", "converted_credits", "adjusted_grade_points", "quality_points",
]


def _fmt(value):
    return "" if value is None else value


def _build_sections(req: ExportRequest):
    """Return (summary_rows, course_rows, warning_rows) for a report."""
    res = req.results
    b = res.breakdown
    summary = [
        ["student_name", _fmt(req.student_name)],
        ["grading_scale", _fmt(req.grading_scale)],
        ["institutional_gpa", _fmt(res.institutional)],
        ["transfer_gpa", _fmt(res.transfer)],
        ["cumulative_gpa", _fmt(res.cumulative)],
        ["total_credits", b.total_credits],
        ["institutional_credits", b.institutional_credits],
        ["transfer_credits", b.transfer_credits],
        ["quality_points", b.quality_points],
        ["institutional_quality_points", b.institutional_quality_points],
        ["transfer_quality_points", b.transfer_quality_points],
    ]

    courses = []
    for detail in res.course_details:
        data = detail.model_dump()
        courses.append([_fmt(data[col]) for col in COURSE_COLUMNS])

    warnings = [[w] for w in res.warnings]
    return summary, courses, warnings


def _filename(ext: str) -> str:
    return f"academic-report-{date.today().isoformat()}.{ext}"


@router.post("/export/report/csv")
def export_report_csv(req: ExportRequest):
    logger.info("POST /export/report/csv - courses: %d", len(req.results.course_details))
    summary, courses, warnings = _build_sections(req)

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["field", "value"])
    writer.writerows(summary)
    writer.writerow([])
    writer.writerow(COURSE_COLUMNS)
    writer.writerows(courses)
    if warnings:
        writer.writerow([])
        writer.writerow(["warning"])
        writer.writerows(warnings)
    output.seek(0)

    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={_filename('csv')}"},
    )


@router.post("/export/report/xlsx")
def export_report_xlsx(req: ExportRequest):
    logger.info("POST /export/report/xlsx - courses: %d", len(req.results.course_details))
    summary, courses, warnings = _build_sections(req)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Summary"
    ws.append(["field", "value"])
    for row in summary:
        ws.append(row)

    ws_courses = wb.create_sheet("Courses")
    ws_courses.append(COURSE_COLUMNS)
    for row in courses:
        ws_courses.append(row)

    ws_warnings = wb.create_sheet("Warnings")
    ws_warnings.append(["warning"])
    for row in warnings:
        ws_warnings.append(row)

    output = io.BytesIO()
    wb.save(output)
    output.seek(0)

    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename={_filename('xlsx')}"},
    )
