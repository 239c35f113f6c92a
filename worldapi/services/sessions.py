"""Session gate: issue, validate and revoke server-side login sessions."""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from worldapi.core.security import decode_session_token, encode_session_token
from worldapi.models import UserSession

if TYPE_CHECKING:
    from worldapi.core.config import Settings

logger = logging.getLogger(__name__)

# Key in UserSession.data holding the logged-in username.
USERNAME_KEY = "username"


class SessionGate:
    """
    Maps opaque session tokens to usernames through the sessions table.

    The cookie value is a signed token wrapping the row id; both the signature
    and the row (present, unexpired, carrying a username) must check out.
    """

    def __init__(self, db: Session, settings: "Settings") -> None:
        self.db = db
        self.settings = settings

    @property
    def max_age(self) -> timedelta:
        return timedelta(days=self.settings.SESSION_MAX_AGE_DAYS)

    def _secret(self) -> str:
        return self.settings.SESSION_SECRET.get_secret_value()

    def issue(self, username: str) -> str:
        """Create a session row for username and return the signed cookie value."""
        now = datetime.now(timezone.utc)
        expires_at = now + self.max_age
        session_id = secrets.token_urlsafe(32)
        self.db.add(
            UserSession(
                id=session_id,
                data={USERNAME_KEY: username},
                created_at=now,
                expires_at=expires_at,
            )
        )
        self.db.commit()
        return encode_session_token(session_id, expires_at, self._secret())

    def _active_row(self, token: str | None) -> UserSession | None:
        if not token:
            return None
        session_id = decode_session_token(token, self._secret())
        if session_id is None:
            return None
        now = datetime.now(timezone.utc)
        return self.db.scalars(
            select(UserSession).where(
                UserSession.id == session_id,
                UserSession.expires_at > now,
            )
        ).first()

    def validate(self, token: str | None) -> str | None:
        """Return the username for a live session, or None if absent, expired or without a username."""
        row = self._active_row(token)
        if row is None:
            return None
        username = (row.data or {}).get(USERNAME_KEY)
        if not isinstance(username, str) or not username:
            return None
        return username

    def revoke(self, token: str | None) -> bool:
        """Delete the session behind token. Returns True if a row was removed."""
        if not token:
            return False
        session_id = decode_session_token(token, self._secret())
        if session_id is None:
            return False
        result = self.db.execute(delete(UserSession).where(UserSession.id == session_id))
        self.db.commit()
        return result.rowcount > 0

    def purge_expired(self) -> int:
        """Delete sessions past their expiry. Idempotent: safe to run repeatedly."""
        now = datetime.now(timezone.utc)
        result = self.db.execute(delete(UserSession).where(UserSession.expires_at <= now))
        self.db.commit()
        if result.rowcount > 0:
            logger.info(
                "Session purge: cutoff=%s, sessions_deleted=%s",
                now.isoformat(),
                result.rowcount,
            )
        return result.rowcount
