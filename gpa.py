"""GPA conversion and aggregation engine.

``compute_gpa`` is the single authoritative implementation of the
institutional / transfer / cumulative GPA formula. It is used by every
calculation endpoint and by the batch CSV path. It performs no I/O and keeps
no state: the same input always produces the same result.
"""
import math
from typing import Iterable, List, Optional

from models import (
    Breakdown,
    CalculationResult,
    CourseDetail,
    CourseRecord,
    GradingScale,
    InstitutionalSettings,
)

# Semester credits per credit of the originating system.
CREDIT_CONVERSION = {
    "quarter": 0.67,
    "trimester": 0.75,
}

NEUTRAL_RIGOR = 3.0
BONUS_CEILING = 2.0  # points allowed above the scale's nominal maximum

# Settings under which the engine reduces to a plain credit-weighted average.
NEUTRAL_SETTINGS = InstitutionalSettings(
    include_transfer_in_gpa=True,
    core_subjects_only=False,
    honors_bonus_points=0.0,
    ap_bonus_points=0.0,
    rigor_adjustment=1.0,
)


def round_half_up(value: float, digits: int = 2) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _fmt(value: Optional[float]) -> str:
    return "None" if value is None else f"{value:g}"


def convert_credits(course: CourseRecord) -> float:
    """Return the credits *course* counts for at this institution.

    Only transfer courses carrying both a credit system and original credits
    are converted; anything else keeps its reported ``credits``.
    """
    if course.is_transfer and course.credit_system and course.original_credits:
        factor = CREDIT_CONVERSION.get(course.credit_system)
        if factor is None:
            return course.original_credits
        return round_half_up(course.original_credits * factor, 1)
    return course.credits


def max_scale_points(scale: GradingScale) -> float:
    return max(scale.grades.values(), default=0.0)


def adjusted_grade_points(course: CourseRecord, scale: GradingScale,
                          settings: InstitutionalSettings) -> tuple:
    """Return ``(points, rigor_multiplier)`` for *course*.

    The multiplier is None when no rigor adjustment applies.
    """
    points = scale.grades.get(course.grade, 0.0)

    if course.course_type == "honors":
        points += settings.honors_bonus_points
    elif course.course_type == "ap":
        points += settings.ap_bonus_points

    multiplier = None
    if course.is_transfer and course.rigor_rating:
        multiplier = (course.rigor_rating / NEUTRAL_RIGOR) * settings.rigor_adjustment
        points *= multiplier

    ceiling = max_scale_points(scale) + BONUS_CEILING
    points = min(max(points, 0.0), ceiling)
    return points, multiplier


def _gpa(points: float, credits: float) -> Optional[float]:
    if credits > 0:
        return round_half_up(points / credits, 2)
    return None


def compute_gpa(courses: Iterable[CourseRecord], scale: GradingScale,
                settings: InstitutionalSettings) -> CalculationResult:
    """Compute institutional, transfer and cumulative GPA for *courses*.

    Degenerate input never raises: unknown grades score 0, unknown credit
    systems keep the original credits, and a bucket without credits yields
    a ``None`` GPA.
    """
    institutional_points = institutional_credits = 0.0
    transfer_points = transfer_credits = 0.0
    total_points = total_credits = 0.0

    details: List[CourseDetail] = []
    warnings: List[str] = []

    for course in courses:
        converted = convert_credits(course)

        if settings.core_subjects_only and course.course_type == "elective":
            continue

        if course.is_transfer and course.credit_system in CREDIT_CONVERSION:
            original = course.original_credits
            if original is None:
                original = course.credits
            warnings.append(
                f"{course.name}: Credits converted from {course.credit_system} system "
                f"({_fmt(original)} → {_fmt(converted)})"
            )

        points, multiplier = adjusted_grade_points(course, scale, settings)
        if multiplier is not None and multiplier != 1:
            warnings.append(
                f"{course.name}: Rigor adjustment applied ({multiplier:.2f}x) "
                "based on institutional rating"
            )

        quality_points = points * converted

        if course.is_transfer:
            transfer_points += quality_points
            transfer_credits += converted
        else:
            institutional_points += quality_points
            institutional_credits += converted

        if not course.is_transfer or settings.include_transfer_in_gpa:
            total_points += quality_points
            total_credits += converted

        details.append(CourseDetail(
            **course.model_dump(),
            converted_credits=converted,
            adjusted_grade_points=round_half_up(points, 2),
            quality_points=round_half_up(quality_points, 2),
        ))

    if transfer_credits > 0 and not settings.include_transfer_in_gpa:
        warnings.append(
            "Transfer credits are excluded from cumulative GPA calculation per institutional policy"
        )
    if transfer_credits > institutional_credits * 2:
        warnings.append(
            "Transfer credits significantly exceed institutional credits - verify transfer limits"
        )

    return CalculationResult(
        institutional=_gpa(institutional_points, institutional_credits),
        transfer=_gpa(transfer_points, transfer_credits),
        cumulative=_gpa(total_points, total_credits),
        breakdown=Breakdown(
            total_credits=round_half_up(total_credits, 2),
            institutional_credits=round_half_up(institutional_credits, 2),
            transfer_credits=round_half_up(transfer_credits, 2),
            quality_points=round_half_up(total_points, 2),
            institutional_quality_points=round_half_up(institutional_points, 2),
            transfer_quality_points=round_half_up(transfer_points, 2),
        ),
        course_details=details,
        warnings=warnings,
    )
