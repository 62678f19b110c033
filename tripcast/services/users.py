"""User directory for the admin dashboard: list, look up, update and delete users."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tripcast.core.database import transaction
from tripcast.core.errors import ConstraintViolation, NotFound, StorageFailure
from tripcast.models import Location, Trip, User
from tripcast.services.accounts import EMAIL_IN_USE, validate_email, validate_name

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found."


def list_users(db: Session) -> list[User]:
    try:
        return db.query(User).order_by(User.id).all()
    except SQLAlchemyError as e:
        logger.exception("Listing users failed")
        raise StorageFailure() from e


def get_user(db: Session, user_id: int) -> User:
    try:
        user = db.get(User, user_id)
    except SQLAlchemyError as e:
        logger.exception("User lookup failed", extra={"user_id": user_id})
        raise StorageFailure() from e
    if user is None:
        raise NotFound(USER_NOT_FOUND)
    return user


def update_user(
    db: Session,
    user_id: int,
    email: str,
    first_name: str,
    last_name: str,
) -> User:
    """
    Change a user's email and names. Password and role are not touched here.

    Raises NotFound, ValidationError, or ConstraintViolation when the email belongs to
    another user.
    """
    email = validate_email(email)
    first_name = validate_name(first_name, "First name")
    last_name = validate_name(last_name, "Last name")

    with transaction(db, conflict_message=EMAIL_IN_USE):
        user = db.get(User, user_id)
        if user is None:
            raise NotFound(USER_NOT_FOUND)
        taken = (
            db.query(User.id)
            .filter(User.email == email, User.id != user_id)
            .first()
        )
        if taken is not None:
            raise ConstraintViolation(EMAIL_IN_USE)
        user.email = email
        user.first_name = first_name
        user.last_name = last_name
    logger.info("User updated", extra={"user_id": user_id})
    return user


def delete_user(db: Session, user_id: int) -> int:
    """
    Delete a user together with their trips and those trips' locations, in one transaction.

    Returns the deleted user id. Raises NotFound when the user does not exist.
    """
    with transaction(db):
        if db.get(User, user_id) is None:
            raise NotFound(USER_NOT_FOUND)
        trip_ids = select(Trip.id).where(Trip.user_id == user_id)
        locations_deleted = (
            db.query(Location)
            .filter(Location.trip_id.in_(trip_ids))
            .delete(synchronize_session=False)
        )
        trips_deleted = (
            db.query(Trip)
            .filter(Trip.user_id == user_id)
            .delete(synchronize_session=False)
        )
        db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
    logger.info(
        "User deleted",
        extra={
            "user_id": user_id,
            "trips_deleted": trips_deleted,
            "locations_deleted": locations_deleted,
        },
    )
    return user_id
