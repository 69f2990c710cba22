"""
Pydantic schemas for application submission endpoints.
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field


class ApplicationDocumentResponse(BaseModel):
    id: int
    application_id: int
    document_type: str
    file_path: str
    status: str
    has_english_test: Optional[bool] = None
    uploaded_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ApplicationResponse(BaseModel):
    id: int
    user_id: int
    university_id: int
    course_id: Optional[int] = None
    status: str
    created_at: Optional[datetime] = None
    university_name: Optional[str] = None
    course_name: Optional[str] = None
    documents: List[ApplicationDocumentResponse] = Field(default_factory=list)

    class Config:
        from_attributes = True

    @classmethod
    def from_model(cls, application) -> "ApplicationResponse":
        response = cls.model_validate(application)
        if application.university is not None:
            response.university_name = application.university.name
        if application.course is not None:
            response.course_name = application.course.name
        return response


class SubmissionResponse(BaseModel):
    """Response for a completed submission."""
    message: str = Field("Application submitted successfully!")
    state: str = Field(..., description="Final workflow state")
    application: ApplicationResponse
    documents: List[ApplicationDocumentResponse]
    dismiss_after_seconds: int = Field(2, description="How long the client keeps the success state visible")


class ApplicationListResponse(BaseModel):
    applications: List[ApplicationResponse]
    total: int
