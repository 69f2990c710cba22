"""
Sign-up, sign-in, sign-out and session restore.

Sessions are persisted rows (`user_sessions`); the bearer token only points
at a row, so signing out revokes the token server-side.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from jose import JWTError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import ACCESS_TOKEN_EXPIRE_MINUTES, ADMIN_EMAILS
from app.core.errors import AuthError
from app.core.security import hash_password, verify_password, create_access_token, decode_access_token
from app.db.models.user import User
from app.db.models.profile import Profile
from app.db.models.user_session import UserSession

logger = logging.getLogger(__name__)


def _open_session(db: Session, user: User) -> Tuple[UserSession, str]:
    lifetime = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    session = UserSession(user_id=user.id, expires_at=datetime.now(timezone.utc) + lifetime)
    db.add(session)
    db.flush()
    token = create_access_token({"sub": user.email, "sid": session.id}, expires_delta=lifetime)
    return session, token


def sign_up(
    db: Session,
    email: str,
    password: str,
    full_name: str,
    education_level: str,
    current_gpa: float,
) -> Tuple[User, str]:
    """
    Create the identity and its profile, then open a session.

    Raises:
        AuthError: 409 if the email is already registered
    """
    email = email.lower()
    if db.query(User).filter(User.email == email).first():
        raise AuthError("Email already registered", status_code=409)

    user = User(
        email=email,
        password_hash=hash_password(password),
        is_admin=email in ADMIN_EMAILS,
    )
    db.add(user)
    db.flush()

    db.add(Profile(
        id=user.id,
        full_name=full_name,
        education_level=education_level,
        current_gpa=current_gpa,
    ))
    _, token = _open_session(db, user)
    db.commit()
    db.refresh(user)

    logger.info(f"User signed up: user_id={user.id}")
    return user, token


def sign_in(db: Session, email: str, password: str) -> Tuple[User, str]:
    user = db.query(User).filter(User.email == email.lower()).first()
    if not user or not verify_password(password, user.password_hash):
        raise AuthError("Invalid credentials")

    _, token = _open_session(db, user)
    db.commit()

    logger.info(f"User signed in: user_id={user.id}")
    return user, token


def restore_session(db: Session, token: str) -> Tuple[User, UserSession]:
    """
    Resolve a bearer token to its user and live session row.

    Raises:
        AuthError: 401 if the token is invalid, expired or signed out
    """
    try:
        payload = decode_access_token(token)
    except JWTError:
        raise AuthError("Invalid token")

    session = db.query(UserSession).filter(UserSession.id == payload["sid"]).first()
    if session is None or not session.is_active():
        raise AuthError("Session expired or signed out")

    user = session.user
    if user is None or user.email != payload["sub"]:
        raise AuthError("Invalid token")
    return user, session


def sign_out(db: Session, session: UserSession) -> None:
    if session.revoked_at is None:
        session.revoked_at = datetime.now(timezone.utc)
        db.commit()
    logger.info(f"User signed out: user_id={session.user_id}")


def update_profile(db: Session, user: User, changes: dict) -> Profile:
    profile: Optional[Profile] = user.profile
    if profile is None:
        if not changes.get("full_name"):
            raise AuthError("Full name is required to create a profile", status_code=400)
        profile = Profile(id=user.id, full_name=changes["full_name"])
        db.add(profile)

    for field, value in changes.items():
        setattr(profile, field, value)

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error(f"Profile update failed: user_id={user.id}", exc_info=True)
        raise
    db.refresh(profile)
    logger.info(f"Profile updated: user_id={user.id}")
    return profile
