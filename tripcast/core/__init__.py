"""Core app configuration, database, security and sessions."""

from tripcast.core.config import Settings, get_settings
from tripcast.core.database import get_db, transaction

__all__ = ["Settings", "get_settings", "get_db", "transaction"]
