"""Credential store: lookups and inserts against the users table."""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from worldapi.models import User

logger = logging.getLogger(__name__)


class UserAlreadyExistsError(Exception):
    """Raised when inserting a username that is already taken."""

    def __init__(self, username: str) -> None:
        self.username = username
        self.message = f"User '{username}' already exists."
        super().__init__(self.message)


class UserStore:
    """Data access for users. Storage failures propagate as SQLAlchemyError."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def count_users(self, username: str) -> int:
        """Number of rows with this username (0 or 1 given the unique index)."""
        return self.db.scalar(
            select(func.count()).select_from(User).where(User.username == username)
        ) or 0

    def insert_user(self, username: str, password_hash: str) -> User:
        """
        Insert a user in a single statement; the unique index decides conflicts.
        Raises UserAlreadyExistsError if the username is taken, even under concurrent signups.
        """
        user = User(username=username, password_hash=password_hash)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise UserAlreadyExistsError(username) from e
        self.db.refresh(user)
        logger.info("Created user: username=%s id=%s", username, user.id)
        return user

    def find_by_username(self, username: str) -> User | None:
        return self.db.scalars(select(User).where(User.username == username)).first()
