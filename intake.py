"""Course intake: CSV parsing, coercion and caller-side validation.

The GPA engine accepts anything well-typed and never rejects input. Shape
problems are caught here, before a calculation is attempted.
"""
import csv
import io
from typing import Dict, Iterable, List

from pydantic import ValidationError

from models import CourseRecord, GradingScale

REQUIRED_CSV_FIELDS = [
    "university_name",
    "program_name",
    "student_id",
    "student_name",
    "term/semester",
    "course_code",
    "course_name",
    "credits",
    "grade",
]

KNOWN_CREDIT_SYSTEMS = {"semester", "quarter", "trimester"}
KNOWN_COURSE_TYPES = {"core", "elective", "honors", "ap"}

MIN_CREDITS = 1
MAX_CREDITS = 6

_TRUE_VALUES = {"true", "yes", "y", "1"}


class IntakeError(ValueError):
    """Input rejected before reaching the GPA engine."""


def _optional_float(value: str, field: str, line: int):
    value = (value or "").strip()
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        raise IntakeError(f"Row {line}: {field} is not a number: {value!r}")


def parse_courses_csv(text: str) -> Dict[str, List[CourseRecord]]:
    """Parse a batch transcript CSV into course records grouped by student_id.

    Raises IntakeError when required columns are missing or a row cannot be
    coerced. Blank lines are skipped.
    """
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    headers = [h.strip() for h in (reader.fieldnames or [])]
    missing = [f for f in REQUIRED_CSV_FIELDS if f not in headers]
    if missing:
        raise IntakeError(f"Missing required fields: {', '.join(missing)}")
    reader.fieldnames = headers

    students: Dict[str, List[CourseRecord]] = {}
    # line 1 is the header
    for line, row in enumerate(reader, start=2):
        row = {k: (v or "").strip() for k, v in row.items() if k is not None}
        if not any(row.values()):
            continue

        credits = _optional_float(row["credits"], "credits", line)
        if credits is None:
            raise IntakeError(f"Row {line}: credits is required")

        is_transfer = row.get("is_transfer", "").lower() in _TRUE_VALUES
        try:
            course = CourseRecord(
                id=row["course_code"] or f"row-{line}",
                name=row["course_name"],
                credits=credits,
                grade=row["grade"],
                semester=row["term/semester"],
                is_transfer=is_transfer,
                original_credits=_optional_float(row.get("original_credits", ""), "original_credits", line),
                credit_system=row.get("credit_system") or None,
                course_type=row.get("course_type") or "core",
                institution_name=row["university_name"] or None,
                rigor_rating=_optional_float(row.get("rigor_rating", ""), "rigor_rating", line),
            )
        except ValidationError as e:
            raise IntakeError(f"Row {line}: {e.errors()[0]['msg']}")

        students.setdefault(row["student_id"], []).append(course)
    return students


def reject_negative_credits(courses: Iterable[CourseRecord]) -> None:
    for course in courses:
        if course.credits < 0:
            raise IntakeError(f"{course.name or course.id}: credits must not be negative")
        if course.original_credits is not None and course.original_credits < 0:
            raise IntakeError(f"{course.name or course.id}: original credits must not be negative")


def validate_courses(courses: Iterable[CourseRecord], scale: GradingScale) -> List[str]:
    """Return human-readable data issues. Issues never block a calculation."""
    issues = []
    for index, course in enumerate(courses, start=1):
        label = course.name.strip() or f"Course {index}"
        if not course.name.strip():
            issues.append(f"Course {index}: missing course name")
        if not MIN_CREDITS <= course.credits <= MAX_CREDITS:
            issues.append(
                f"{label}: credit hours {course.credits:g} outside the usual "
                f"{MIN_CREDITS}-{MAX_CREDITS} range"
            )
        if course.grade not in scale.grades:
            issues.append(f"{label}: grade {course.grade!r} is not on the {scale.name} scale and counts as 0 points")
        if course.course_type not in KNOWN_COURSE_TYPES:
            issues.append(f"{label}: unknown course type {course.course_type!r} treated as core")
        if course.is_transfer:
            if course.credit_system and course.credit_system not in KNOWN_CREDIT_SYSTEMS:
                issues.append(f"{label}: unknown credit system {course.credit_system!r}, credits left unconverted")
            if course.rigor_rating is not None and not 1 <= course.rigor_rating <= 5:
                issues.append(f"{label}: rigor rating {course.rigor_rating:g} outside 1-5")
    return issues
