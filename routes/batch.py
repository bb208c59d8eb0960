from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from pydantic import ValidationError
from models import BatchGPAResponse, BatchOptions
from gpa import compute_gpa
from intake import IntakeError, parse_courses_csv, reject_negative_credits, validate_courses
from scales import get_scale
from storage import default_settings
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_SCALE_NAME = "4.0 Scale (Standard)"


@router.post("/calculate-batch-gpa", response_model=BatchGPAResponse)
async def calculate_batch_gpa(file: UploadFile = File(...), options: str = Form("{}")):
    logger.info("POST /calculate-batch-gpa - file: %s", file.filename)
    try:
        opts = BatchOptions.model_validate_json(options)
    except ValidationError as e:
        logger.warning("POST /calculate-batch-gpa - invalid options: %s", e)
        raise HTTPException(status_code=400, detail=f"Invalid options: {e.errors()[0]['msg']}")

    if opts.grading_scale is not None:
        scale = opts.grading_scale
    else:
        try:
            scale = get_scale(opts.grading_scale_name or DEFAULT_SCALE_NAME)
        except KeyError:
            raise HTTPException(status_code=400, detail=f"Unknown grading scale: {opts.grading_scale_name}")
    settings = opts.institutional_settings or default_settings()

    raw = await file.read()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="CSV file must be UTF-8 encoded")

    try:
        students = parse_courses_csv(text)
        for courses in students.values():
            reject_negative_credits(courses)
    except IntakeError as e:
        logger.warning("POST /calculate-batch-gpa - rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    if not students:
        raise HTTPException(status_code=400, detail="CSV file is empty or contains no course rows")

    results = {}
    issues = []
    for student_id, courses in students.items():
        results[student_id] = compute_gpa(courses, scale, settings)
        issues.extend(f"{student_id}: {issue}" for issue in validate_courses(courses, scale))

    logger.info("POST /calculate-batch-gpa - computed GPA for %d students", len(results))
    return BatchGPAResponse(student_count=len(results), results=results, validation_issues=issues)
