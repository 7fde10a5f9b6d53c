"""User service: CRUD over the user store with an email format check."""

from __future__ import annotations

import logging

from library.db.database import Database
from library.db.user_repo import UserStore
from library.errors import ValidationError
from library.models.user import User

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: Database):
        self._db = db
        self._user_store = UserStore(db)

    def get_all_users(self) -> list[User]:
        return self._user_store.find_all()

    def get_user_by_id(self, user_id: int) -> User:
        return self._user_store.find_by_id(user_id)

    def get_user_by_email(self, email: str) -> User:
        return self._user_store.find_by_email(email)

    def add_user(self, user: User) -> User:
        _check_email(user.email)
        self._user_store.save(user)
        logger.info(f"Added user {user.id}: {user.email}")
        return user

    def update_user(self, user: User) -> User:
        _check_email(user.email)
        self._user_store.update(user)
        logger.info(f"Updated user {user.id}")
        return user

    def delete_user(self, user_id: int) -> None:
        self._user_store.delete(user_id)
        logger.info(f"Deleted user {user_id}")


def _check_email(email: str) -> None:
    if "@" not in (email or ""):
        raise ValidationError(f"Invalid email address: {email!r}", key=email)
