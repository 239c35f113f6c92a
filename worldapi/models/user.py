"""ORM model for application users."""

from sqlalchemy import Column, Integer, String

from worldapi.models.base import Base


class User(Base):
    """
    User account for session login.

    Uniqueness of username is enforced by the unique index, not by a prior count.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
