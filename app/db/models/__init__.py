"""
Database models module.

Imports every model so it is registered with SQLAlchemy's Base.metadata
before table creation and Alembic autogeneration.
"""
from app.db.models.user import User
from app.db.models.profile import Profile
from app.db.models.user_session import UserSession
from app.db.models.university import University
from app.db.models.course import Course
from app.db.models.application import Application
from app.db.models.application_document import ApplicationDocument

__all__ = [
    "User",
    "Profile",
    "UserSession",
    "University",
    "Course",
    "Application",
    "ApplicationDocument",
]
