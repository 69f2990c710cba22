"""
Persisted sign-in sessions.

A session row is created at sign-in (or sign-up), checked on every restore and
revoked at sign-out. The JWT handed to the client carries the row id as `sid`.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base


def _new_session_id() -> str:
    return uuid.uuid4().hex


class UserSession(Base):
    __tablename__ = "user_sessions"

    id = Column(String(32), primary_key=True, default=_new_session_id)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    revoked_at = Column(DateTime(timezone=True), nullable=True)

    user = relationship("User", back_populates="sessions")

    def is_active(self, now: datetime = None) -> bool:
        if self.revoked_at is not None:
            return False
        now = now or datetime.now(timezone.utc)
        expires_at = self.expires_at
        # SQLite drops tzinfo on round-trip
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at > now
