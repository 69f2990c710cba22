from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base

BACHELORS = "Bachelor's"
MASTERS = "Master's"
COURSE_LEVELS = (BACHELORS, MASTERS)


class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    university_id = Column(Integer, ForeignKey("universities.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    level = Column(String, nullable=False)  # "Bachelor's" | "Master's"
    overview = Column(Text, nullable=True)
    duration = Column(String, nullable=True)
    start_admission = Column(String, nullable=True)
    application_deadline = Column(String, nullable=True)
    program_structure = Column(Text, nullable=True)
    academic_requirements = Column(Text, nullable=True)
    tuition_fee = Column(Integer, nullable=True)
    scholarship_info = Column(Text, nullable=True)
    visa_info = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    university = relationship("University", back_populates="courses")
