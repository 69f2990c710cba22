"""
Application endpoints: submit an application with its documents and list
the signed-in user's applications.
"""
import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.orm import Session, selectinload

from app.core.auth_dependency import get_db, get_session_context, require_complete_profile, SessionContext
from app.core.errors import MissingDocumentsError, SubmissionError
from app.db.models.application import Application
from app.db.models.course import Course
from app.schemas.application import (
    ApplicationResponse,
    ApplicationDocumentResponse,
    ApplicationListResponse,
    SubmissionResponse,
)
from app.services.notification_service import build_relay_payload, notify_application_submitted
from app.services.storage_service import StorageService, get_storage
from app.services.submission_service import AttachedFile, submit_application

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["Applications"])


def _attachment(upload: Optional[UploadFile]) -> Optional[AttachedFile]:
    if upload is None or not upload.filename:
        return None
    return AttachedFile(filename=upload.filename, content=upload.file.read())


# ✅ SUBMIT APPLICATION
@router.post("", status_code=status.HTTP_201_CREATED, response_model=SubmissionResponse)
def create_application(
    background_tasks: BackgroundTasks,
    course_id: int = Form(...),
    hasEnglishTest: bool = Form(False),
    academics: Optional[UploadFile] = File(None),
    passport: Optional[UploadFile] = File(None),
    cv: Optional[UploadFile] = File(None),
    recommendationLetter1: Optional[UploadFile] = File(None),
    recommendationLetter2: Optional[UploadFile] = File(None),
    experienceLetter: Optional[UploadFile] = File(None),
    ctx: SessionContext = Depends(require_complete_profile),
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
):
    """
    Create the application, upload its documents and record them.

    On a failed step the response is 500 with the underlying message. The
    application record and any uploaded files are kept (`application_id`
    and `failed_step` identify them).
    """
    course = db.query(Course).filter(Course.id == course_id).first()
    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")

    files = {
        "academics": _attachment(academics),
        "passport": _attachment(passport),
        "cv": _attachment(cv),
        "recommendationLetter1": _attachment(recommendationLetter1),
        "recommendationLetter2": _attachment(recommendationLetter2),
        "experienceLetter": _attachment(experienceLetter),
    }

    try:
        result = submit_application(db, storage, ctx.user_id, course, files, hasEnglishTest)
    except MissingDocumentsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SubmissionError as e:
        application = e.result.application
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": str(e),
                "failed_step": e.result.failed_step,
                "application_id": application.id if application is not None else None,
            },
        )

    background_tasks.add_task(
        notify_application_submitted,
        build_relay_payload(result, ctx.user, course),
    )

    db.refresh(result.application)
    return SubmissionResponse(
        state=result.state.value,
        application=ApplicationResponse.from_model(result.application),
        documents=[ApplicationDocumentResponse.model_validate(d) for d in result.documents],
        dismiss_after_seconds=result.dismiss_after_seconds,
    )


# ✅ LIST MY APPLICATIONS
@router.get("/my", response_model=ApplicationListResponse)
def list_my_applications(
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db)
):
    applications = (
        db.query(Application)
        .options(
            selectinload(Application.documents),
            selectinload(Application.university),
            selectinload(Application.course),
        )
        .filter(Application.user_id == ctx.user_id)
        .order_by(Application.created_at.desc(), Application.id.desc())
        .all()
    )
    return ApplicationListResponse(
        applications=[ApplicationResponse.from_model(a) for a in applications],
        total=len(applications),
    )


@router.get("/{application_id}", response_model=ApplicationResponse)
def get_application(
    application_id: int,
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db)
):
    application = (
        db.query(Application)
        .filter(Application.id == application_id, Application.user_id == ctx.user_id)
        .first()
    )
    if application is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")
    return ApplicationResponse.from_model(application)
