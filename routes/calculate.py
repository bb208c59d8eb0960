from fastapi import APIRouter, Depends, HTTPException
from models import (
    SimpleGPARequest,
    SimpleGPAResponse,
    TransferGPARequest,
    TransferGPAResponse,
)
from gpa import compute_gpa, NEUTRAL_SETTINGS
from intake import IntakeError, reject_negative_credits, validate_courses
from insights import InsightClient
from storage import append_history, default_settings
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


def get_insight_client() -> InsightClient:
    return InsightClient()


@router.post("/calculate-gpa", response_model=SimpleGPAResponse)
def calculate_gpa(req: SimpleGPARequest):
    logger.info("POST /calculate-gpa - courses: %d, scale: %s", len(req.courses), req.grading_scale.name)
    try:
        reject_negative_credits(req.courses)
    except IntakeError as e:
        logger.warning("POST /calculate-gpa - rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    # Plain credit-weighted average: every course counts, no bonuses.
    courses = [c.model_copy(update={"is_transfer": False}) for c in req.courses]
    result = compute_gpa(courses, req.grading_scale, NEUTRAL_SETTINGS)
    logger.info("POST /calculate-gpa - gpa: %s over %s credits", result.cumulative, result.breakdown.total_credits)

    return SimpleGPAResponse(
        gpa=result.cumulative,
        total_credits=result.breakdown.total_credits,
        total_quality_points=result.breakdown.quality_points,
        course_details=result.course_details,
        validation_issues=validate_courses(req.courses, req.grading_scale),
    )


@router.post("/calculate-transfer-gpa", response_model=TransferGPAResponse)
def calculate_transfer_gpa(req: TransferGPARequest,
                           insight_client: InsightClient = Depends(get_insight_client)):
    logger.info(
        "POST /calculate-transfer-gpa - courses: %d, transfer: %d, scale: %s",
        len(req.courses), sum(1 for c in req.courses if c.is_transfer), req.grading_scale.name,
    )
    try:
        reject_negative_credits(req.courses)
    except IntakeError as e:
        logger.warning("POST /calculate-transfer-gpa - rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    settings = req.institutional_settings or default_settings()
    result = compute_gpa(req.courses, req.grading_scale, settings)
    logger.info(
        "POST /calculate-transfer-gpa - institutional: %s, transfer: %s, cumulative: %s, warnings: %d",
        result.institutional, result.transfer, result.cumulative, len(result.warnings),
    )

    response = TransferGPAResponse(
        results=result,
        validation_issues=validate_courses(req.courses, req.grading_scale),
    )
    if req.include_insights:
        response.insights = insight_client.generate(result, req.student_name)
    if req.save_to_history:
        entry = append_history(result, req.grading_scale.name, req.student_name)
        response.history_id = entry.id
        logger.info("POST /calculate-transfer-gpa - recorded history entry %s", entry.id)
    return response
