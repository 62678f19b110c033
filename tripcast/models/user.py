"""ORM model for application users (accounts, profile and RBAC)."""

import enum

from sqlalchemy import Column, DateTime, Enum, Integer, String, func
from sqlalchemy.orm import relationship

from tripcast.models.base import Base


class Role(str, enum.Enum):
    """User role enumeration."""

    USER = "USER"
    ADMIN = "ADMIN"


class User(Base):
    """
    User account for session authentication and role-based access control.

    password_hash holds a bcrypt hash; plain passwords are never stored.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, name="user_role", native_enum=False, length=16),
        nullable=False,
        default=Role.USER,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    trips = relationship("Trip", back_populates="owner", passive_deletes=True)
