"""
Domain exceptions shared by services and routes.

Each exception carries a client-safe message and the HTTP status it maps to.
Services raise them; a single exception handler in tripcast.main renders them as
``{"detail": message}`` with the matching status code.

Usage:
    from tripcast.core.errors import NotFound

    raise NotFound("Trip not found.")
"""


class TripcastError(Exception):
    """Base exception for all Tripcast domain errors."""

    status_code: int = 500
    default_message: str = "An unexpected error occurred."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TripcastError):
    """Malformed input: bad email, password length out of range, empty required field."""

    status_code = 422
    default_message = "Invalid input."


class ConstraintViolation(TripcastError):
    """A write conflicts with a storage constraint (duplicate email, dangling reference)."""

    status_code = 409
    default_message = "The request conflicts with existing data."


class AuthFailure(TripcastError):
    """Login failed. The message never reveals whether the email or the password was wrong."""

    status_code = 401
    default_message = "Invalid email or password."


class Unauthenticated(TripcastError):
    """No valid session for a route that requires one."""

    status_code = 401
    default_message = "Not authenticated"


class Forbidden(TripcastError):
    status_code = 403
    default_message = "Access denied."


class NotFound(TripcastError):
    status_code = 404
    default_message = "Not found."


class OwnerNotFound(NotFound):
    """The user a trip would belong to does not exist."""

    default_message = "User not found."


class StorageFailure(TripcastError):
    """Unexpected database error. The cause is logged; the client only sees a generic message."""

    status_code = 500
    default_message = "An internal error occurred. Please try again."
