"""
Search and filter logic for the university catalog.

Pure functions over already-loaded records: no database or network access.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional


@dataclass(frozen=True)
class FilterCriteria:
    """Numeric/boolean filters. Defaults match the browse page's initial state."""
    min_gpa: float = 0.0
    max_tuition: float = 50000
    max_education_gap: int = 5
    scholarship_required: bool = False


DEFAULT_CRITERIA = FilterCriteria()


def _text(value: Optional[str]) -> str:
    return (value or "").lower()


def matches_search(university, query: str) -> bool:
    """True if the query is a case-insensitive substring of name, location or country."""
    if not query:
        return True
    needle = query.lower()
    return (
        needle in _text(getattr(university, "name", None))
        or needle in _text(getattr(university, "location", None))
        or needle in _text(getattr(university, "country", None))
    )


def matches_criteria(university, criteria: FilterCriteria) -> bool:
    minimum_gpa = getattr(university, "minimum_gpa", None)
    tuition_fee = getattr(university, "tuition_fee", None)
    education_gap = getattr(university, "education_gap", None)

    # Records with unknown values never satisfy a numeric bound
    if minimum_gpa is None or tuition_fee is None or education_gap is None:
        return False

    return (
        minimum_gpa >= criteria.min_gpa
        and tuition_fee <= criteria.max_tuition
        and education_gap <= criteria.max_education_gap
        and (not criteria.scholarship_required or bool(university.scholarship_available))
    )


def filter_universities(
    universities: Iterable,
    query: str = "",
    criteria: FilterCriteria = DEFAULT_CRITERIA,
) -> List:
    """
    Return the universities that match both the search text and the criteria.

    Input order is preserved. An empty query matches everything.
    """
    return [
        university for university in universities
        if matches_search(university, query) and matches_criteria(university, criteria)
    ]
