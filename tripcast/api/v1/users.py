"""User management endpoints for the admin dashboard."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from tripcast.api.v1.auth import get_session_store, require_admin
from tripcast.core.database import get_db
from tripcast.core.sessions import SessionStore
from tripcast.schemas.auth import (
    CurrentUser,
    UserDeletedResponse,
    UserResponse,
    UsersListResponse,
    UserUpdateRequest,
)
from tripcast.services.users import delete_user, list_users, update_user

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=UsersListResponse)
def get_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all users (admin only)."""
    return UsersListResponse(
        users=[UserResponse.model_validate(u) for u in list_users(db)]
    )


@router.put("/{user_id}", response_class=PlainTextResponse)
def put_user(
    user_id: int,
    body: UserUpdateRequest,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> str:
    """Update a user's email and names (admin only). Password and role cannot be changed here."""
    update_user(db, user_id, body.email, body.first_name, body.last_name)
    return "User updated successfully."


@router.delete("/{user_id}", response_model=UserDeletedResponse)
def remove_user(
    user_id: int,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> UserDeletedResponse:
    """Delete a user with their trips and locations (admin only), and end their sessions."""
    deleted_id = delete_user(db, user_id)
    revoked = store.revoke_user(deleted_id)
    logger.info(
        "User removed by admin",
        extra={"admin_id": admin.id, "user_id": deleted_id, "sessions_revoked": revoked},
    )
    return UserDeletedResponse(deleted_id=deleted_id)
