"""
Documents attached to an application.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base

# Form field names double as document types
REQUIRED_DOCUMENT_FIELDS = (
    "academics",
    "passport",
    "cv",
    "recommendationLetter1",
    "recommendationLetter2",
)
OPTIONAL_DOCUMENT_FIELDS = ("experienceLetter",)
DOCUMENT_FIELDS = REQUIRED_DOCUMENT_FIELDS + OPTIONAL_DOCUMENT_FIELDS

ENGLISH_TEST_TYPE = "english_test"
NO_FILE_PATH = "none"


class ApplicationDocument(Base):
    """
    One uploaded artifact (or the synthesized English-test marker) of an application.

    `status` mirrors the application review status but is set independently.
    """
    __tablename__ = "application_documents"

    id = Column(Integer, primary_key=True, index=True)
    application_id = Column(Integer, ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True)
    document_type = Column(String, nullable=False)
    file_path = Column(String, nullable=False)
    uploaded_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    status = Column(String, default="pending", nullable=False)
    has_english_test = Column(Boolean, nullable=True)

    application = relationship("Application", back_populates="documents")

    def __repr__(self):
        return f"<ApplicationDocument(id={self.id}, type='{self.document_type}')>"
