"""Request/response schemas for auth, profile and user-management endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from tripcast.models.user import Role


class SignupRequest(BaseModel):
    """New account. Email syntax and password length are checked by the accounts service."""

    email: str = Field(..., max_length=320, description="Email address (unique)")
    password: str = Field(..., description="Password, 6-64 characters")
    first_name: str = Field(..., max_length=255)
    last_name: str = Field(..., max_length=255)


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., max_length=320, description="Email address")
    password: str = Field(..., max_length=1024, description="Password")


class TokenResponse(BaseModel):
    """Signed session token returned after successful login (also set as a cookie)."""

    access_token: str = Field(..., description="Signed session token")
    token_type: str = Field(default="bearer", description="Token type")


class MessageResponse(BaseModel):
    message: str


class CurrentUser(BaseModel):
    """Authenticated user (id, email, role) plus the session it came from."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: Role
    session_id: str | None = None


class UserResponse(BaseModel):
    """User profile (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str
    last_name: str
    role: Role
    created_at: datetime | None = None


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[UserResponse]


class UserUpdateRequest(BaseModel):
    """Admin update: only email and names are mutable."""

    email: str = Field(..., max_length=320)
    first_name: str = Field(..., max_length=255)
    last_name: str = Field(..., max_length=255)


class UserDeletedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "User deleted successfully."
    deleted_id: int = Field(..., serialization_alias="deletedId")
