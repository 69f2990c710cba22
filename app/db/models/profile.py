from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base


class Profile(Base):
    __tablename__ = "profiles"

    # Shares its identity with the authenticated user (one-to-one)
    id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    full_name = Column(String, nullable=False)
    education_level = Column(String, nullable=True)
    current_gpa = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="profile")

    @property
    def is_complete(self) -> bool:
        return bool(self.full_name) and bool(self.education_level) and self.current_gpa is not None

    def __repr__(self):
        return f"<Profile(id={self.id}, full_name='{self.full_name}')>"
