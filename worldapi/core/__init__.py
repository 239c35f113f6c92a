"""Core app configuration, database and security."""

from worldapi.core.config import get_settings, settings
from worldapi.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
