"""
Application submission workflow.

Turns a course selection plus file attachments into one Application row, the
uploaded files, and their ApplicationDocument rows:

    created -> uploading -> documenting -> complete
       any step may end in failed (failed_step records which one)

Nothing is rolled back on failure. An Application created in step 1 stays
`pending` and already-uploaded files stay in the bucket when a later step
fails; the result reports what exists so cleanup or retry can be added on
top of these states.
"""
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, FIRST_EXCEPTION, wait
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core import config
from app.core.errors import MissingDocumentsError, SubmissionError
from app.db.models.application import Application
from app.db.models.application_document import (
    ApplicationDocument,
    DOCUMENT_FIELDS,
    REQUIRED_DOCUMENT_FIELDS,
    ENGLISH_TEST_TYPE,
    NO_FILE_PATH,
)
from app.db.models.course import Course
from app.services.catalog_service import storage_error_message
from app.services.storage_service import StorageService

logger = logging.getLogger(__name__)

DISMISS_AFTER_SECONDS = 2

STEP_CREATE_APPLICATION = 1
STEP_UPLOAD_FILES = 2
STEP_INSERT_DOCUMENTS = 4


class SubmissionState(str, Enum):
    CREATED = "created"
    UPLOADING = "uploading"
    DOCUMENTING = "documenting"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass
class AttachedFile:
    filename: str
    content: bytes


@dataclass
class SubmissionResult:
    state: Optional[SubmissionState] = None
    application: Optional[Application] = None
    documents: List[ApplicationDocument] = field(default_factory=list)
    uploaded_paths: List[str] = field(default_factory=list)
    failed_step: Optional[int] = None
    error: Optional[str] = None
    dismiss_after_seconds: int = DISMISS_AFTER_SECONDS

    @property
    def succeeded(self) -> bool:
        return self.state == SubmissionState.COMPLETE


def validate_attachments(files: Dict[str, Optional[AttachedFile]]) -> Dict[str, AttachedFile]:
    """
    Keep only real attachments for known document fields.

    Raises:
        MissingDocumentsError: If a required document is absent or empty
    """
    attached = {
        name: files[name]
        for name in DOCUMENT_FIELDS
        if files.get(name) is not None and files[name].content
    }
    missing = [name for name in REQUIRED_DOCUMENT_FIELDS if name not in attached]
    if missing:
        raise MissingDocumentsError(missing)
    return attached


def document_path(user_id: int, application_id: int, timestamp: int, field_name: str) -> str:
    return f"{user_id}/{application_id}/{timestamp}_{field_name}"


class ApplicationSubmission:
    """
    One submission attempt. Call `run()` once.

    Uploads run concurrently; the first upload failure ends the attempt
    without waiting for the others. Uploads already running at that point
    are not stopped: if they finish they are appended to
    `result.uploaded_paths` after `run()` has raised.
    """

    def __init__(
        self,
        db: Session,
        storage: StorageService,
        user_id: int,
        course: Course,
        files: Dict[str, Optional[AttachedFile]],
        has_english_test: bool = False,
        max_workers: int = None,
    ):
        self.db = db
        self.storage = storage
        self.user_id = user_id
        self.course = course
        self.files = validate_attachments(files)
        self.has_english_test = bool(has_english_test)
        self.max_workers = max_workers or config.UPLOAD_MAX_WORKERS
        self.result = SubmissionResult()
        self._paths_lock = threading.Lock()

    def _transition(self, state: SubmissionState) -> None:
        self.result.state = state
        application_id = self.result.application.id if self.result.application is not None else None
        logger.info(f"Submission state={state.value}: user_id={self.user_id}, application_id={application_id}")

    def _fail(self, step: int, message: str, cause: Exception) -> SubmissionError:
        self.result.failed_step = step
        self.result.error = message
        self._transition(SubmissionState.FAILED)
        logger.error(f"Submission failed at step {step}: {message}", exc_info=cause)
        return SubmissionError(message, self.result)

    def run(self) -> SubmissionResult:
        application = self._create_application()
        self._transition(SubmissionState.CREATED)

        self._transition(SubmissionState.UPLOADING)
        documents = self._upload_documents(application)
        documents.append(ApplicationDocument(
            application_id=application.id,
            document_type=ENGLISH_TEST_TYPE,
            file_path=NO_FILE_PATH,
            has_english_test=self.has_english_test,
            status="pending",
        ))

        self._transition(SubmissionState.DOCUMENTING)
        self._insert_documents(documents)

        self.result.documents = documents
        self._transition(SubmissionState.COMPLETE)
        return self.result

    def _create_application(self) -> Application:
        application = Application(
            user_id=self.user_id,
            university_id=self.course.university_id,
            course_id=self.course.id,
            status="pending",
        )
        try:
            self.db.add(application)
            self.db.commit()
            self.db.refresh(application)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise self._fail(STEP_CREATE_APPLICATION, storage_error_message(e), e)

        self.result.application = application
        return application

    def _record_upload(self, path: str) -> None:
        with self._paths_lock:
            self.result.uploaded_paths.append(path)

    def _record_late_upload(self, future) -> None:
        # Uploads still running at a fail-fast abort may land afterwards
        if not future.cancelled() and future.exception() is None:
            self._record_upload(future.result())

    def _upload_documents(self, application: Application) -> List[ApplicationDocument]:
        # One timestamp per submission so all its files share a path prefix
        timestamp = int(time.time() * 1000)
        paths: Dict[str, str] = {}

        executor = ThreadPoolExecutor(max_workers=max(1, min(self.max_workers, len(self.files))))
        try:
            futures = {
                executor.submit(
                    self.storage.upload,
                    document_path(self.user_id, application.id, timestamp, name),
                    attachment.content,
                    attachment.filename,
                ): name
                for name, attachment in self.files.items()
            }
            done, not_done = wait(futures, return_when=FIRST_EXCEPTION)

            failure = None
            for future in done:
                error = future.exception()
                if error is None:
                    paths[futures[future]] = future.result()
                    self._record_upload(future.result())
                elif failure is None:
                    failure = error
            if failure is not None:
                for future in not_done:
                    future.add_done_callback(self._record_late_upload)
                raise self._fail(STEP_UPLOAD_FILES, str(failure), failure)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        # Field order, not completion order
        return [
            ApplicationDocument(
                application_id=application.id,
                document_type=name,
                file_path=paths[name],
                status="pending",
            )
            for name in DOCUMENT_FIELDS
            if name in paths
        ]

    def _insert_documents(self, documents: List[ApplicationDocument]) -> None:
        try:
            self.db.add_all(documents)
            self.db.commit()
            for document in documents:
                self.db.refresh(document)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise self._fail(STEP_INSERT_DOCUMENTS, storage_error_message(e), e)


def submit_application(
    db: Session,
    storage: StorageService,
    user_id: int,
    course: Course,
    files: Dict[str, Optional[AttachedFile]],
    has_english_test: bool = False,
) -> SubmissionResult:
    """
    Run the submission workflow.

    Raises:
        MissingDocumentsError: Required attachments absent; nothing was written
        SubmissionError: A step failed; `error.result` tells which and what exists
    """
    return ApplicationSubmission(db, storage, user_id, course, files, has_english_test).run()
