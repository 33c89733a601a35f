"""User data access layer (credential store)."""

import logging
from datetime import UTC, datetime

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from reqanalyst.models import User

from .exceptions import DuplicateError

logger = logging.getLogger(__name__)


class UserRepository:
    """Centralized user data access.

    Naming conventions:
    - find_* : Query that may return None
    - get_* : Query that raises exception if missing

    Writes are flushed, not committed. The calling service owns the transaction.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_id(self, user_id: str) -> User | None:
        """Find user by primary key."""
        return self._db.query(User).filter(User.id == user_id).first()

    def find_by_email(self, email: str) -> User | None:
        """Find user by email (exact match, case-sensitive as stored)."""
        return self._db.query(User).filter(User.email == email).first()

    def create(self, email: str, password_hash: str, name: str) -> User:
        """Create a user, raising DuplicateError if the email is taken."""
        if self.find_by_email(email):
            raise DuplicateError("User", "email")

        user = User(email=email, password_hash=password_hash, name=name)
        self._db.add(user)
        try:
            self._db.flush()
        except IntegrityError as e:
            # Lost a race with a concurrent registration for the same email
            self._db.rollback()
            raise DuplicateError("User", "email") from e
        return user

    def set_reset_token(self, user_id: str, token_hash: str, expires_at: datetime) -> None:
        """Store the hash and expiry of a newly issued reset token."""
        self._db.execute(
            update(User)
            .where(User.id == user_id)
            .values(reset_token_hash=token_hash, reset_token_expires_at=expires_at)
            .execution_options(synchronize_session=False)
        )
        self._db.expire_all()

    def find_by_valid_reset_hash(self, token_hash: str) -> User | None:
        """Find the user holding this reset hash, if it has not expired."""
        return (
            self._db.query(User)
            .filter(
                User.reset_token_hash == token_hash,
                User.reset_token_expires_at > datetime.now(UTC),
            )
            .first()
        )

    def update_password_hash(
        self,
        user_id: str,
        new_hash: str,
        *,
        reset_token_hash: str | None = None,
    ) -> bool:
        """Replace the password hash and clear both reset fields in one statement.

        When reset_token_hash is given, the update only applies while that hash
        is still stored and unexpired, so at most one consumer of a token wins.

        Returns:
            True if exactly one row was updated.
        """
        stmt = update(User).where(User.id == user_id)
        if reset_token_hash is not None:
            stmt = stmt.where(
                User.reset_token_hash == reset_token_hash,
                User.reset_token_expires_at > datetime.now(UTC),
            )
        result = self._db.execute(
            stmt.values(
                password_hash=new_hash,
                reset_token_hash=None,
                reset_token_expires_at=None,
            ).execution_options(synchronize_session=False)
        )
        self._db.expire_all()
        return result.rowcount == 1
