"""ORM model for server-side login sessions."""

from sqlalchemy import JSON, Column, DateTime, String, func

from worldapi.models.base import Base


class UserSession(Base):
    """
    One row per issued session token.

    data holds the session values; the app only reads and writes "username".
    """

    __tablename__ = "sessions"

    id = Column(String(64), primary_key=True)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
