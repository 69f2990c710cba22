"""
Catalog endpoints: browse, search and filter universities and their courses.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_db
from app.core.errors import CatalogEmptyError, CatalogLoadError
from app.schemas.university import UniversityResponse, UniversityListResponse, CourseResponse
from app.services.catalog_service import load_catalog, get_university
from app.services.filter_engine import FilterCriteria, DEFAULT_CRITERIA, filter_universities

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/universities", tags=["Universities"])


@router.get("", response_model=UniversityListResponse)
def list_universities(
    search: str = Query("", description="Matches name, location or country (case-insensitive)"),
    min_gpa: float = Query(DEFAULT_CRITERIA.min_gpa, ge=0.0, le=4.0),
    max_tuition: float = Query(DEFAULT_CRITERIA.max_tuition, ge=0),
    max_education_gap: int = Query(DEFAULT_CRITERIA.max_education_gap, ge=0),
    scholarship_required: bool = Query(DEFAULT_CRITERIA.scholarship_required),
    db: Session = Depends(get_db)
):
    """
    Load the whole catalog and return the universities matching search and filters.

    Returns 404 when the catalog itself is empty, so clients can tell an empty
    catalog from a search with no matches (200 with an empty list).
    """
    try:
        catalog = load_catalog(db)
    except CatalogEmptyError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except CatalogLoadError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    criteria = FilterCriteria(
        min_gpa=min_gpa,
        max_tuition=max_tuition,
        max_education_gap=max_education_gap,
        scholarship_required=scholarship_required,
    )
    matches = filter_universities(catalog, search, criteria)
    logger.debug(f"Universities filtered: catalog={len(catalog)}, matches={len(matches)}")

    return UniversityListResponse(
        universities=[UniversityResponse.model_validate(u) for u in matches],
        total=len(matches),
    )


def _get_or_404(db: Session, university_id: int):
    try:
        university = get_university(db, university_id)
    except CatalogLoadError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    if university is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="University not found")
    return university


@router.get("/{university_id}", response_model=UniversityResponse)
def university_detail(university_id: int, db: Session = Depends(get_db)):
    return UniversityResponse.model_validate(_get_or_404(db, university_id))


@router.get("/{university_id}/courses", response_model=List[CourseResponse])
def university_courses(
    university_id: int,
    level: Optional[str] = Query(None, description="Bachelor's or Master's"),
    db: Session = Depends(get_db)
):
    university = _get_or_404(db, university_id)
    courses = [c for c in university.courses if level is None or c.level == level]
    return [CourseResponse.model_validate(c) for c in courses]
