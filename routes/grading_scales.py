from fastapi import APIRouter, HTTPException
from models import GradingScale, Institution
from scales import get_scale, list_countries, list_scales, search_institutions
from typing import List, Optional

router = APIRouter()


@router.get("/grading-scales", response_model=List[GradingScale])
def get_grading_scales():
    return list_scales()


@router.get("/grading-scales/{name}", response_model=GradingScale)
def get_grading_scale(name: str):
    try:
        return get_scale(name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Grading scale not found: {name}")


@router.get("/institutions", response_model=List[Institution])
def get_institutions(search: str = "", country: Optional[str] = None):
    return search_institutions(search, country)


@router.get("/institutions/countries", response_model=List[str])
def get_countries():
    return list_countries()
