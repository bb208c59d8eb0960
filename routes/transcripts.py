from fastapi import APIRouter, HTTPException
from models import TranscriptConversion, TranscriptGPARequest
from transcript import convert_transcript
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/calculate-transcript-gpa", response_model=TranscriptConversion)
def calculate_transcript_gpa(req: TranscriptGPARequest):
    logger.info(
        "POST /calculate-transcript-gpa - institution: %s, system: %s, courses: %d",
        req.institution_data.name, req.institution_data.grading_scale, len(req.courses),
    )
    negative = [c.name for c in req.courses if c.credits < 0]
    if negative:
        logger.warning("POST /calculate-transcript-gpa - negative credits: %s", negative)
        raise HTTPException(status_code=400, detail=f"Credits must not be negative: {', '.join(negative)}")

    result = convert_transcript(req.courses, req.institution_data)
    logger.info("POST /calculate-transcript-gpa - converted: %s, rigor adjusted: %s",
                result.converted_gpa, result.rigor_adjusted_gpa)
    return result
