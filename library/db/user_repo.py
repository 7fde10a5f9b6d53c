"""Repository for the ``users`` table: full CRUD with ACID transactions."""

from __future__ import annotations

import logging

from library.db.database import Database, storage_errors
from library.db.schema import USERS_DDL
from library.errors import NotFoundError, StorageError
from library.models.user import User

logger = logging.getLogger(__name__)


class UserStore:
    """Single-Responsibility repository for user persistence.

    Constructing the store ensures the ``users`` table exists.
    """

    def __init__(self, db: Database):
        self._db = db
        self._db.executescript(USERS_DDL)

    # -- Create ----------------------------------------------------------------

    def save(self, user: User) -> User:
        """Insert a new user. Raises ``ConflictError`` on duplicate email."""
        with storage_errors(f"Could not save user {user.email!r}", key=user.email):
            with self._db.transaction() as conn:
                cursor = conn.execute(
                    "INSERT INTO users (name, email) VALUES (?, ?)",
                    (user.name, user.email),
                )
        if cursor.lastrowid is None:
            raise StorageError(f"Could not save user {user.email!r}: no id generated")
        user.id = cursor.lastrowid
        logger.debug(f"Saved user {user.id}: {user.email}")
        return user

    # -- Read ------------------------------------------------------------------

    def find_all(self) -> list[User]:
        with storage_errors("Could not load users"):
            rows = self._db.fetchall("SELECT id, name, email FROM users ORDER BY id")
        return [User.from_row(r) for r in rows]

    def find_by_id(self, user_id: int) -> User:
        with storage_errors(f"Could not load user {user_id}", key=user_id):
            row = self._db.fetchone("SELECT id, name, email FROM users WHERE id = ?", (user_id,))
        if row is None:
            raise NotFoundError(user_id, "user")
        return User.from_row(row)

    def find_by_email(self, email: str) -> User:
        with storage_errors(f"Could not load user {email!r}", key=email):
            row = self._db.fetchone("SELECT id, name, email FROM users WHERE email = ?", (email,))
        if row is None:
            raise NotFoundError(email, "user")
        return User.from_row(row)

    # -- Update ----------------------------------------------------------------

    def update(self, user: User) -> User:
        with storage_errors(f"Could not update user {user.id}", key=user.id):
            with self._db.transaction() as conn:
                cursor = conn.execute(
                    "UPDATE users SET name = ?, email = ? WHERE id = ?",
                    (user.name, user.email, user.id),
                )
                if cursor.rowcount == 0:
                    raise NotFoundError(user.id, "user")
        logger.debug(f"Updated user {user.id}")
        return user

    # -- Delete ----------------------------------------------------------------

    def delete(self, user_id: int) -> None:
        with storage_errors(f"Could not delete user {user_id}", key=user_id):
            with self._db.transaction() as conn:
                cursor = conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
                if cursor.rowcount == 0:
                    raise NotFoundError(user_id, "user")
        logger.debug(f"Deleted user {user_id}")
