"""
Catalog loading: every university with its nested courses in one read.
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.core.errors import CatalogEmptyError, CatalogLoadError
from app.db.models.course import BACHELORS, MASTERS
from app.db.models.university import University

logger = logging.getLogger(__name__)


def storage_error_message(error: SQLAlchemyError) -> str:
    """The driver's own message, without SQLAlchemy's statement dump."""
    return str(getattr(error, "orig", None) or error)


def attach_course_counts(university: University) -> University:
    courses = university.courses or []
    university.bachelors_count = sum(1 for course in courses if course.level == BACHELORS)
    university.masters_count = sum(1 for course in courses if course.level == MASTERS)
    return university


def load_catalog(db: Session) -> List[University]:
    """
    Fetch all universities with nested courses and derived course counts.

    Raises:
        CatalogEmptyError: The read succeeded but the catalog is empty
        CatalogLoadError: The read failed; carries the storage error message
    """
    try:
        universities = (
            db.query(University)
            .options(selectinload(University.courses))
            .order_by(University.id)
            .all()
        )
    except SQLAlchemyError as e:
        message = storage_error_message(e)
        logger.error(f"Error fetching universities: {message}")
        raise CatalogLoadError(message) from e

    if not universities:
        logger.info("No universities found")
        raise CatalogEmptyError()

    logger.debug(f"Loaded catalog: universities={len(universities)}")
    return [attach_course_counts(university) for university in universities]


def get_university(db: Session, university_id: int) -> Optional[University]:
    try:
        university = (
            db.query(University)
            .options(selectinload(University.courses))
            .filter(University.id == university_id)
            .first()
        )
    except SQLAlchemyError as e:
        raise CatalogLoadError(storage_error_message(e)) from e

    if university is None:
        return None
    return attach_course_counts(university)
