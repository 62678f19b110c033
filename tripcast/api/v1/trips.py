"""Trip planner endpoints: save, list and delete the signed-in user's trips."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tripcast.api.v1.auth import get_current_user
from tripcast.core.database import get_db
from tripcast.schemas.auth import CurrentUser
from tripcast.schemas.trip import (
    TripCreateRequest,
    TripDeletedResponse,
    TripSavedResponse,
    TripSummary,
)
from tripcast.services.trips import create_trip, delete_trip, list_trips

router = APIRouter()


@router.post("", response_model=TripSavedResponse)
def save_trip(
    body: TripCreateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> TripSavedResponse:
    """
    Save a trip with its locations in the given order.

    Body: {"name": "Spring Break", "locations": ["Miami", "Orlando"]} ("locationNames" is
    accepted too). The trip and its locations are stored atomically.
    """
    trip_id = create_trip(db, current_user.id, body.name, body.location_names)
    return TripSavedResponse(trip_id=trip_id)


@router.get("", response_model=list[TripSummary])
def saved_trips(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> list[TripSummary]:
    """All trips of the signed-in user: [{tripId, name, locationNames}]."""
    return list_trips(db, current_user.id)


@router.delete("/{trip_id}", response_model=TripDeletedResponse)
def remove_trip(
    trip_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> TripDeletedResponse:
    """Delete one of the signed-in user's trips and its locations. 403 for someone else's trip."""
    deleted_id = delete_trip(db, trip_id, requester_id=current_user.id)
    return TripDeletedResponse(deleted_trip_id=deleted_id)
