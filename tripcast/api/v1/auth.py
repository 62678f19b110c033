"""Sign-up, login/logout, profile, and the auth dependencies (session, current user, admin)."""

import logging
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from tripcast.core.config import Settings
from tripcast.core.database import get_db
from tripcast.core.errors import Unauthenticated
from tripcast.core.security import create_session_token, decode_session_token
from tripcast.core.sessions import SessionRecord, SessionStore
from tripcast.models.user import Role, User
from tripcast.schemas.auth import (
    CurrentUser,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    TokenResponse,
    UserResponse,
)
from tripcast.services.accounts import authenticate, create_user
from tripcast.services.users import get_user

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def _resolve_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    settings: Settings,
) -> str | None:
    """Bearer header first, then the session cookie."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_current_session(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> SessionRecord:
    """
    Dependency: the live server-side session named by the caller's signed token.

    Raises 401 when the token is missing, invalid or expired, or the session was revoked.
    """
    token = _resolve_token(request, credentials, settings)
    if not token:
        raise Unauthenticated()
    try:
        payload = decode_session_token(token, settings)
    except jwt.PyJWTError:
        raise Unauthenticated("Invalid or expired session") from None
    record = store.get(str(payload.get("sid")))
    if record is None or str(record.user_id) != str(payload.get("sub")):
        raise Unauthenticated("Invalid or expired session")
    return record


def get_current_user(
    record: Annotated[SessionRecord, Depends(get_current_session)],
    db: Annotated[Session, Depends(get_db)],
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> CurrentUser:
    """Dependency: the user behind the current session. 401 if the account no longer exists."""
    user = db.get(User, record.user_id)
    if user is None:
        store.revoke(record.session_id)
        raise Unauthenticated("User not found")
    return CurrentUser(
        id=user.id,
        email=user.email,
        role=user.role,
        session_id=record.session_id,
    )


def require_admin(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: ask the app's admin policy about the current user. Raises 403 on refusal."""
    policy = request.app.state.admin_policy
    if not policy(current_user):
        logger.warning("Admin access denied", extra={"user_id": current_user.id})
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def signup(
    body: SignupRequest,
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Create a USER account. 422 on invalid email or password length, 409 if the email is taken."""
    user = create_user(
        db,
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        role=Role.USER,
    )
    return UserResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> TokenResponse:
    """
    Authenticate with email and password and open a session.

    The token is returned in the body and set as an HttpOnly cookie; send either the
    cookie or "Authorization: Bearer <access_token>" on later requests.
    """
    user = authenticate(db, body.email, body.password)
    record = store.create(user.id)
    token = create_session_token(record, settings)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    logger.info("Login succeeded", extra={"user_id": user.id})
    return TokenResponse(access_token=token, token_type="bearer")


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    record: Annotated[SessionRecord, Depends(get_current_session)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> MessageResponse:
    """Revoke the current session; the same token is rejected afterwards."""
    store.revoke(record.session_id)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    logger.info("Logout", extra={"user_id": record.user_id})
    return MessageResponse(message="Logged out successfully.")


@router.get("/me", response_model=UserResponse)
def read_profile(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Profile of the signed-in user."""
    return UserResponse.model_validate(get_user(db, current_user.id))
