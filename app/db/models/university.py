"""
University catalog model.
"""
from sqlalchemy import Column, Integer, String, Text, Float, Boolean, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base


class University(Base):
    """
    A university in the catalog.

    Numeric columns are nullable: the non-strict CSV import passes unparsed
    values through and leaves the database to store or reject them.
    """
    __tablename__ = "universities"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    location = Column(String, nullable=True)
    country = Column(String, nullable=True)
    tuition_fee = Column(Integer, nullable=True)  # per year
    acceptance_rate = Column(Integer, nullable=True)  # 0-100
    scholarship_available = Column(Boolean, default=False, nullable=False)
    minimum_gpa = Column(Float, nullable=True)  # 0.0-4.0
    education_gap = Column(Integer, nullable=True)  # years
    description = Column(Text, nullable=True)
    image_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    courses = relationship("Course", back_populates="university", cascade="all, delete-orphan", order_by="Course.id")

    def __repr__(self):
        return f"<University(id={self.id}, name='{self.name}')>"
