"""Pydantic request/response schemas."""

from tripcast.schemas.auth import (
    CurrentUser,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    TokenResponse,
    UserDeletedResponse,
    UserResponse,
    UsersListResponse,
    UserUpdateRequest,
)
from tripcast.schemas.health import HealthResponse
from tripcast.schemas.trip import (
    TripCreateRequest,
    TripDeletedResponse,
    TripSavedResponse,
    TripSummary,
)
from tripcast.schemas.weather import (
    Conditions,
    Coordinates,
    CurrentWeather,
    Forecast,
    ForecastPeriod,
)

__all__ = [
    "Conditions",
    "Coordinates",
    "CurrentUser",
    "CurrentWeather",
    "Forecast",
    "ForecastPeriod",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "SignupRequest",
    "TokenResponse",
    "TripCreateRequest",
    "TripDeletedResponse",
    "TripSavedResponse",
    "TripSummary",
    "UserDeletedResponse",
    "UserResponse",
    "UsersListResponse",
    "UserUpdateRequest",
]
