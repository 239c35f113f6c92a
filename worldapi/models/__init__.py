"""SQLAlchemy ORM models."""

from worldapi.models.base import Base
from worldapi.models.city import City
from worldapi.models.country import Country
from worldapi.models.session import UserSession
from worldapi.models.user import User

__all__ = ["Base", "City", "Country", "User", "UserSession"]
