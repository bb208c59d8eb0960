from fastapi import APIRouter
from models import InstitutionalSettings
from storage import default_settings, save_settings
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/settings", response_model=InstitutionalSettings)
def get_settings():
    settings = default_settings()
    logger.info("GET /settings - include transfer: %s, core only: %s",
                settings.include_transfer_in_gpa, settings.core_subjects_only)
    return settings


@router.post("/settings", response_model=InstitutionalSettings)
def post_settings(settings: InstitutionalSettings):
    logger.info("POST /settings - %s", settings.model_dump())
    save_settings(settings.model_dump(by_alias=True))
    return settings
