"""
Bulk import of universities from a CSV file.

Default mode coerces each row and inserts everything in one batch: numeric
text that does not parse becomes NaN and is handed to the database as-is.
Strict mode validates each coerced row first, inserts only the valid ones
and reports the rejected rows.
"""
import io
import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

import pandas as pd
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ImportFileError
from app.db.models.university import University
from app.services.catalog_service import storage_error_message

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "name",
    "location",
    "tuition_fee",
    "acceptance_rate",
    "scholarship_available",
    "minimum_gpa",
    "education_gap",
    "description",
    "image_url",
]
INTEGER_COLUMNS = ("tuition_fee", "acceptance_rate", "education_gap")
TEXT_COLUMNS = ("name", "location", "description", "image_url")

CSV_CONTENT_TYPES = {"text/csv"}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass
class RowRejection:
    row: int
    errors: List[str]


@dataclass
class ImportResult:
    inserted: int = 0
    rejected: List[RowRejection] = field(default_factory=list)

    @property
    def message(self) -> str:
        return f"Successfully uploaded {self.inserted} universities"


def is_csv_upload(filename: Optional[str], content_type: Optional[str]) -> bool:
    if content_type in CSV_CONTENT_TYPES:
        return True
    return bool(filename) and filename.lower().endswith(".csv")


def parse_int(value: Optional[str]) -> Union[int, float]:
    """Leading-integer parse: "12000" -> 12000, "12.7" -> 12, "abc" -> NaN."""
    match = _LEADING_INT.match(value or "")
    return int(match.group(1)) if match else math.nan


def parse_decimal(value: Optional[str]) -> float:
    """Leading-decimal parse: "3.5" -> 3.5, "3.5 GPA" -> 3.5, "" -> NaN."""
    match = _LEADING_FLOAT.match(value or "")
    return float(match.group(1)) if match else math.nan


def parse_bool(value: Optional[str]) -> bool:
    return (value or "").lower() == "true"


def coerce_row(row: Dict[str, str]) -> Dict[str, Any]:
    """Map one CSV row onto the university columns. Never raises."""
    coerced: Dict[str, Any] = {name: row.get(name, "") for name in TEXT_COLUMNS}
    for name in INTEGER_COLUMNS:
        coerced[name] = parse_int(row.get(name))
    coerced["minimum_gpa"] = parse_decimal(row.get("minimum_gpa"))
    coerced["scholarship_available"] = parse_bool(row.get("scholarship_available"))
    return coerced


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def validate_row(coerced: Dict[str, Any]) -> List[str]:
    """Errors for one coerced row; empty list means the row is valid."""
    errors = []
    if not (coerced.get("name") or "").strip():
        errors.append("name is required")
    for name in INTEGER_COLUMNS + ("minimum_gpa",):
        if _is_nan(coerced[name]):
            errors.append(f"{name} is not a number")

    if not _is_nan(coerced["minimum_gpa"]) and not 0.0 <= coerced["minimum_gpa"] <= 4.0:
        errors.append("minimum_gpa must be between 0.0 and 4.0")
    if not _is_nan(coerced["acceptance_rate"]) and not 0 <= coerced["acceptance_rate"] <= 100:
        errors.append("acceptance_rate must be between 0 and 100")
    if not _is_nan(coerced["education_gap"]) and coerced["education_gap"] < 0:
        errors.append("education_gap must not be negative")
    if not _is_nan(coerced["tuition_fee"]) and coerced["tuition_fee"] < 0:
        errors.append("tuition_fee must not be negative")
    return errors


def read_csv_rows(content: bytes) -> List[Dict[str, str]]:
    """
    Parse CSV text with a header row; blank lines are skipped.

    Raises:
        ImportFileError: Unreadable file or missing columns
    """
    try:
        text = content.decode("utf-8-sig")
        frame = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except (UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise ImportFileError(f"Failed to parse CSV: {e}") from e

    frame.columns = [str(column).strip() for column in frame.columns]
    missing = [column for column in CSV_COLUMNS if column not in frame.columns]
    if missing:
        raise ImportFileError(f"Failed to parse CSV: missing columns {', '.join(missing)}")

    return frame[CSV_COLUMNS].fillna("").to_dict(orient="records")


def split_rows(rows: List[Dict[str, str]], strict: bool) -> Tuple[List[Dict[str, Any]], List[RowRejection]]:
    accepted, rejected = [], []
    for index, row in enumerate(rows, start=1):
        coerced = coerce_row(row)
        if strict:
            errors = validate_row(coerced)
            if errors:
                rejected.append(RowRejection(row=index, errors=errors))
                continue
        accepted.append(coerced)
    return accepted, rejected


def import_universities(db: Session, content: bytes, strict: bool = False) -> ImportResult:
    """
    Parse, coerce and batch-insert universities.

    Raises:
        ImportFileError: The file could not be parsed; nothing was inserted
        SQLAlchemyError: The batch insert failed; nothing was inserted
    """
    rows = read_csv_rows(content)
    accepted, rejected = split_rows(rows, strict)

    if accepted:
        try:
            db.add_all([University(**values) for values in accepted])
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"University batch insert failed: {storage_error_message(e)}")
            raise

    result = ImportResult(inserted=len(accepted), rejected=rejected)
    logger.info(f"University import: inserted={result.inserted}, rejected={len(rejected)}, strict={strict}")
    return result
