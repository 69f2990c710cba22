from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_db, get_session_context, SessionContext
from app.core.errors import AuthError
from app.schemas.auth import SignupRequest, ProfileUpdate, ProfileResponse, SessionResponse
from app.services import auth_service

router = APIRouter(prefix="/auth", tags=["Auth"])


def _session_response(user, token: str = None) -> SessionResponse:
    return SessionResponse(
        user_id=user.id,
        email=user.email,
        is_admin=bool(user.is_admin),
        profile=ProfileResponse.model_validate(user.profile) if user.profile else None,
        access_token=token,
    )


# ✅ SIGN UP: identity + profile in one step
@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=SessionResponse)
def signup(payload: SignupRequest, db: Session = Depends(get_db)):
    try:
        user, token = auth_service.sign_up(
            db,
            email=payload.email,
            password=payload.password,
            full_name=payload.full_name,
            education_level=payload.education_level,
            current_gpa=payload.current_gpa,
        )
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return _session_response(user, token)


# ✅ SIGN IN (OAuth2 form: username is the email)
@router.post("/login", response_model=SessionResponse)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    try:
        user, token = auth_service.sign_in(db, form_data.username, form_data.password)
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return _session_response(user, token)


# ✅ SESSION RESTORE
@router.get("/session", response_model=SessionResponse)
def current_session(ctx: SessionContext = Depends(get_session_context)):
    return _session_response(ctx.user)


# ✅ SIGN OUT
@router.post("/logout")
def logout(
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db)
):
    auth_service.sign_out(db, ctx.session)
    return {"message": "Signed out"}


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    payload: ProfileUpdate,
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db)
):
    try:
        profile = auth_service.update_profile(db, ctx.user, payload.model_dump(exclude_unset=True))
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except SQLAlchemyError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update profile")
    return ProfileResponse.model_validate(profile)
