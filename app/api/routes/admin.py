"""
Admin endpoints: bulk import of university data.
"""
import logging

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_db, require_admin, SessionContext
from app.core.errors import ImportFileError
from app.schemas.bulk_import import ImportResponse, RowError
from app.services.catalog_service import storage_error_message
from app.services.import_service import import_universities, is_csv_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/universities/import", response_model=ImportResponse)
def import_universities_csv(
    file: UploadFile = File(...),
    strict: bool = Query(False, description="Validate each row and skip invalid rows instead of inserting them as-is"),
    ctx: SessionContext = Depends(require_admin),
    db: Session = Depends(get_db)
):
    if not is_csv_upload(file.filename, file.content_type):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Please upload a CSV file")

    try:
        result = import_universities(db, file.file.read(), strict=strict)
    except ImportFileError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SQLAlchemyError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=storage_error_message(e))

    logger.info(f"Universities imported by user_id={ctx.user_id}: inserted={result.inserted}")
    return ImportResponse(
        message=result.message,
        inserted=result.inserted,
        rejected=len(result.rejected),
        errors=[RowError(row=r.row, errors=r.errors) for r in result.rejected],
    )
