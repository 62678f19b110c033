"""ORM models for saved trips and their ordered locations."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from tripcast.models.base import Base


class Trip(Base):
    """A named trip owned by one user."""

    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    owner = relationship("User", back_populates="trips")
    # Locations are removed explicitly by the trip service before the trip row.
    locations = relationship(
        "Location",
        back_populates="trip",
        order_by="Location.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Location(Base):
    """
    One stop of a trip. Free-text place name, no coordinates.

    position is the 0-based index in the list the trip was saved with; reads order by it.
    """

    __tablename__ = "locations"
    __table_args__ = (
        UniqueConstraint("trip_id", "position", name="uq_locations_trip_position"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    trip = relationship("Trip", back_populates="locations")
