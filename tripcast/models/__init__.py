"""SQLAlchemy ORM models."""

from tripcast.models.base import Base
from tripcast.models.trip import Location, Trip
from tripcast.models.user import Role, User

__all__ = ["Base", "Location", "Role", "Trip", "User"]
