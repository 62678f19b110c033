"""Trip repository: create, list and delete trips with their ordered locations, scoped by owner."""

import logging
from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from tripcast.core.database import transaction
from tripcast.core.errors import (
    Forbidden,
    NotFound,
    OwnerNotFound,
    StorageFailure,
    ValidationError,
)
from tripcast.models import Location, Trip, User
from tripcast.schemas.trip import TripSummary

logger = logging.getLogger(__name__)

MAX_NAME_LEN = 255


def _clean_trip_name(name: str) -> str:
    stripped = (name or "").strip()
    if not stripped:
        raise ValidationError("Trip name is required.")
    if len(stripped) > MAX_NAME_LEN:
        raise ValidationError(f"Trip name must be {MAX_NAME_LEN} characters or less.")
    return stripped


def _clean_location_names(location_names: Sequence[str]) -> list[str]:
    cleaned: list[str] = []
    for i, raw in enumerate(location_names):
        if not isinstance(raw, str) or not raw.strip():
            raise ValidationError(f"Location at index {i} must be a non-empty name.")
        if len(raw.strip()) > MAX_NAME_LEN:
            raise ValidationError(
                f"Location at index {i} must be {MAX_NAME_LEN} characters or less."
            )
        cleaned.append(raw.strip())
    return cleaned


def create_trip(
    db: Session,
    owner_id: int,
    name: str,
    location_names: Sequence[str],
) -> int:
    """
    Save a trip and one location per name, in the given order. Returns the new trip id.

    The trip row and all location rows are written in one transaction: on any failure
    nothing is persisted. Raises ValidationError, OwnerNotFound, ConstraintViolation or
    StorageFailure.
    """
    name = _clean_trip_name(name)
    names = _clean_location_names(location_names)

    with transaction(db):
        if db.get(User, owner_id) is None:
            raise OwnerNotFound()
        trip = Trip(name=name, user_id=owner_id)
        trip.locations = [
            Location(name=location_name, position=position)
            for position, location_name in enumerate(names)
        ]
        db.add(trip)
        db.flush()
        trip_id = trip.id

    logger.info(
        "Trip saved",
        extra={"trip_id": trip_id, "owner_id": owner_id, "location_count": len(names)},
    )
    return trip_id


def list_trips(db: Session, owner_id: int) -> list[TripSummary]:
    """Every trip owned by owner_id (oldest first), each with location names in saved order."""
    try:
        trips = (
            db.query(Trip)
            .options(selectinload(Trip.locations))
            .filter(Trip.user_id == owner_id)
            .order_by(Trip.id)
            .all()
        )
    except SQLAlchemyError as e:
        logger.exception("Listing trips failed", extra={"owner_id": owner_id})
        raise StorageFailure() from e
    return [
        TripSummary(
            trip_id=trip.id,
            name=trip.name,
            location_names=[location.name for location in trip.locations],
        )
        for trip in trips
    ]


def delete_trip(db: Session, trip_id: int, requester_id: int | None = None) -> int:
    """
    Delete a trip's locations, then the trip, in one transaction. Returns the deleted id.

    When requester_id is given the trip must belong to that user, else Forbidden.
    Raises NotFound when no such trip exists.
    """
    with transaction(db):
        owner_id = db.query(Trip.user_id).filter(Trip.id == trip_id).scalar()
        if owner_id is None:
            raise NotFound("Trip not found.")
        if requester_id is not None and owner_id != requester_id:
            logger.warning(
                "Trip delete denied",
                extra={"trip_id": trip_id, "requester_id": requester_id},
            )
            raise Forbidden("You can only delete your own trips.")
        locations_deleted = (
            db.query(Location)
            .filter(Location.trip_id == trip_id)
            .delete(synchronize_session=False)
        )
        db.query(Trip).filter(Trip.id == trip_id).delete(synchronize_session=False)

    logger.info(
        "Trip deleted",
        extra={"trip_id": trip_id, "locations_deleted": locations_deleted},
    )
    return trip_id
