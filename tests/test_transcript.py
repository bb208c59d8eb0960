from models import InstitutionData, TranscriptCourse
from transcript import convert_transcript


def _courses(*pairs, credits=4):
    return [TranscriptCourse(name=f"Course {i}", grade=g, credits=credits) for i, g in enumerate(pairs)]


def test_ten_point_grades_rescaled_to_four():
    inst = InstitutionData(name="IIT Bombay", grading_scale="10-point CGPA", rigor=4.8)
    result = convert_transcript(_courses("AA", "BB"), inst)
    assert [c.converted_grade for c in result.course_conversions] == [4.0, 3.2]
    assert result.converted_gpa == 3.6
    assert result.rigor_multiplier == 1.2
    # 3.6 * 1.2 is capped at 4.0
    assert result.rigor_adjusted_gpa == 4.0


def test_unknown_grading_system_falls_back_to_four_point_table():
    inst = InstitutionData(name="Somewhere", grading_scale="Mystery", rigor=4.0)
    result = convert_transcript(_courses("A", "B", credits=3), inst)
    assert result.converted_gpa == 3.5
    assert result.rigor_adjusted_gpa == 3.5
    assert "4.0 GPA" in result.conversion_methodology


def test_low_rigor_reduces_adjusted_gpa_only():
    inst = InstitutionData(name="Cambridge", grading_scale="Class Honours", rigor=2.0)
    result = convert_transcript(_courses("First", "2:1"), inst)
    assert result.converted_gpa == 3.75
    assert result.rigor_multiplier == 0.5
    assert result.rigor_adjusted_gpa == 1.88


def test_unknown_grade_counts_as_zero():
    inst = InstitutionData(name="MIT", grading_scale="4.0 GPA", rigor=4.0)
    result = convert_transcript(_courses("A", "??"), inst)
    assert result.course_conversions[1].converted_grade == 0
    assert result.converted_gpa == 2.0


def test_no_courses_gives_zero_gpa():
    inst = InstitutionData(name="MIT", grading_scale="4.0 GPA", rigor=4.9)
    result = convert_transcript([], inst)
    assert result.converted_gpa == 0.0
    assert result.total_courses == 0
    assert result.total_credits == 0


def test_original_cgpa_echoed_in_notes():
    inst = InstitutionData(name="IIT Delhi", grading_scale="10-point CGPA", rigor=4.8, original_cgpa=8.7)
    result = convert_transcript(_courses("AA"), inst)
    assert result.original_cgpa == 8.7
    assert "Original CGPA: 8.7" in result.conversion_notes
    assert "1.20x" in result.conversion_notes


def test_calculate_transcript_gpa_endpoint(client):
    resp = client.post("/api/calculate-transcript-gpa", json={
        "courses": [
            {"id": "1", "name": "Thermodynamics", "credits": 4, "grade": "AA", "semester": "Fall 2022"},
            {"id": "2", "name": "Circuits", "credits": 4, "grade": "BB", "semester": "Fall 2022"},
        ],
        "institutionData": {"name": "IIT Bombay", "gradingScale": "10-point CGPA", "rigor": 4.8},
        "studentName": "Priya",
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["convertedGPA"] == 3.6
    assert data["rigorAdjustedGPA"] == 4.0
    assert data["totalCourses"] == 2
    assert data["courseConversions"][0]["originalGrade"] == "AA"


def test_calculate_transcript_gpa_rejects_negative_credits(client):
    resp = client.post("/api/calculate-transcript-gpa", json={
        "courses": [{"name": "Bad", "credits": -1, "grade": "A"}],
        "institutionData": {"name": "MIT", "gradingScale": "4.0 GPA", "rigor": 4.9},
    })
    assert resp.status_code == 400
    assert "Bad" in resp.json()["detail"]
