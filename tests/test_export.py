import csv
import io

import openpyxl

from gpa import compute_gpa
from models import CourseRecord, ExportRequest, GradingScale, InstitutionalSettings
from routes.export import COURSE_COLUMNS, _build_sections

SCALE = GradingScale(name="4.0 Scale (Standard)", grades={"A": 4.0, "B": 3.0})


def _result():
    courses = [
        CourseRecord(id="1", name="Biology", credits=3, grade="A"),
        CourseRecord(id="2", name="Calculus", credits=4, grade="B", is_transfer=True,
                     original_credits=4, credit_system="quarter", institution_name="Valley College"),
    ]
    return compute_gpa(courses, SCALE, InstitutionalSettings(include_transfer_in_gpa=False))


# ── pure unit tests for _build_sections ──────────────────────────────────────

def test_build_sections_summary():
    summary, _, _ = _build_sections(ExportRequest(results=_result(), student_name="Dana",
                                                  grading_scale="4.0 Scale (Standard)"))
    fields = dict(summary)
    assert fields["student_name"] == "Dana"
    assert fields["institutional_gpa"] == 4.0
    assert fields["transfer_gpa"] == 3.0
    assert fields["cumulative_gpa"] == 4.0
    assert fields["transfer_credits"] == 2.7


def test_build_sections_blank_for_missing_values():
    summary, courses, warnings = _build_sections(ExportRequest(results=compute_gpa([], SCALE, InstitutionalSettings())))
    fields = dict(summary)
    assert fields["student_name"] == ""
    assert fields["cumulative_gpa"] == ""
    assert courses == []
    assert warnings == []


def test_build_sections_course_rows():
    _, courses, warnings = _build_sections(ExportRequest(results=_result()))
    assert len(courses) == 2
    row = dict(zip(COURSE_COLUMNS, courses[1]))
    assert row["name"] == "Calculus"
    assert row["converted_credits"] == 2.7
    assert row["institution_name"] == "Valley College"
    assert dict(zip(COURSE_COLUMNS, courses[0]))["original_credits"] == ""
    assert len(warnings) == 2


# ── integration tests for export endpoints ───────────────────────────────────

def test_export_csv(client):
    payload = ExportRequest(results=_result(), student_name="Dana").model_dump(by_alias=True)
    resp = client.post("/api/export/report/csv", json=payload)
    assert resp.status_code == 200
    assert "text/csv" in resp.headers["content-type"]
    assert "academic-report-" in resp.headers["content-disposition"]

    rows = list(csv.reader(io.StringIO(resp.text)))
    assert rows[0] == ["field", "value"]
    assert ["student_name", "Dana"] in rows
    assert COURSE_COLUMNS in rows
    assert ["warning"] in rows
    assert "Calculus" in resp.text


def test_export_xlsx(client):
    payload = ExportRequest(results=_result()).model_dump(by_alias=True)
    resp = client.post("/api/export/report/xlsx", json=payload)
    assert resp.status_code == 200
    content_type = resp.headers["content-type"]
    assert "spreadsheetml" in content_type or "officedocument" in content_type

    wb = openpyxl.load_workbook(io.BytesIO(resp.content))
    assert wb.sheetnames == ["Summary", "Courses", "Warnings"]
    courses = list(wb["Courses"].iter_rows(values_only=True))
    assert list(courses[0]) == COURSE_COLUMNS
    assert courses[2][1] == "Calculus"
    assert wb["Warnings"].max_row == 3


def test_export_requires_results(client):
    resp = client.post("/api/export/report/csv", json={"studentName": "Dana"})
    assert resp.status_code == 422
