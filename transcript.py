"""Foreign transcript conversion onto a 4.0 scale."""
from typing import List

from gpa import round_half_up
from models import CourseConversion, InstitutionData, TranscriptConversion, TranscriptCourse
from scales import get_conversion_scale

TARGET_MAX = 4.0
MAX_RIGOR_MULTIPLIER = 1.2
RIGOR_BASELINE = 4.0


def convert_transcript(courses: List[TranscriptCourse],
                       institution: InstitutionData) -> TranscriptConversion:
    """Convert *courses* graded under *institution*'s system to 4.0 points.

    The rigor multiplier is ``rigor / 4`` capped at 1.2 and only affects
    ``rigor_adjusted_gpa``, which is itself capped at 4.0.
    """
    scale = get_conversion_scale(institution.grading_scale)
    ten_point = institution.grading_scale == "10-point CGPA"

    total_points = 0.0
    total_credits = 0.0
    conversions = []

    for course in courses:
        points = scale.grades.get(course.grade, 0.0)
        if ten_point and points > TARGET_MAX:
            points = points / 10 * TARGET_MAX

        quality_points = points * course.credits
        total_points += quality_points
        total_credits += course.credits

        conversions.append(CourseConversion(
            course=course.name,
            original_grade=course.grade,
            converted_grade=round_half_up(points, 2),
            quality_points=round_half_up(quality_points, 2),
        ))

    base_gpa = total_points / total_credits if total_credits > 0 else 0.0
    multiplier = min(institution.rigor / RIGOR_BASELINE, MAX_RIGOR_MULTIPLIER)
    adjusted = min(base_gpa * multiplier, TARGET_MAX)

    notes = f"Converted using standard conversion factors with rigor adjustment of {multiplier:.2f}x."
    if institution.original_cgpa:
        notes += f" Original CGPA: {institution.original_cgpa}"

    return TranscriptConversion(
        converted_gpa=round_half_up(base_gpa, 2),
        rigor_adjusted_gpa=round_half_up(adjusted, 2),
        rigor_multiplier=round_half_up(multiplier, 2),
        course_conversions=conversions,
        conversion_methodology=(
            f"Conversion from {institution.grading_scale} to 4.0 scale "
            f"using the {scale.name} table"
        ),
        conversion_notes=notes,
        original_cgpa=institution.original_cgpa,
        institution_rigor=institution.rigor,
        total_courses=len(courses),
        total_credits=round_half_up(total_credits, 2),
    )
