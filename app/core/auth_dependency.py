from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.core.errors import AuthError
from app.db.session import SessionLocal
from app.db.models.user import User
from app.db.models.profile import Profile
from app.db.models.user_session import UserSession
from app.services.auth_service import restore_session

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def get_db():
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@dataclass
class SessionContext:
    """
    Identity of the caller for one request.

    Built from the bearer token and the persisted session row, and injected
    into every route that needs to know who is acting.
    """
    user: User
    session: UserSession

    @property
    def user_id(self) -> int:
        return self.user.id

    @property
    def profile(self) -> Optional[Profile]:
        return self.user.profile

    @property
    def is_admin(self) -> bool:
        return bool(self.user.is_admin)


def get_session_context(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> SessionContext:
    try:
        user, session = restore_session(db, token)
    except AuthError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    return SessionContext(user=user, session=session)


def require_complete_profile(ctx: SessionContext = Depends(get_session_context)) -> SessionContext:
    if ctx.profile is None or not ctx.profile.is_complete:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Please complete your profile before applying"
        )
    return ctx


def require_admin(ctx: SessionContext = Depends(get_session_context)) -> SessionContext:
    if not ctx.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return ctx
