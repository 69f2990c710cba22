from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base

APPLICATION_STATUSES = ("pending", "approved", "rejected")


class Application(Base):
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    university_id = Column(Integer, ForeignKey("universities.id"), nullable=False)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=True)
    status = Column(String, default="pending", nullable=False)  # pending | approved | rejected
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    university = relationship("University")
    course = relationship("Course")
    documents = relationship("ApplicationDocument", back_populates="application", order_by="ApplicationDocument.id")

    __table_args__ = (
        Index("idx_applications_user_created", "user_id", "created_at"),
    )
