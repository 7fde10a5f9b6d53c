"""Database layer: SQLite with ACID transactions and repository pattern."""

from library.db.database import Database, get_db, reset_db
from library.db.schema import SCHEMA_DDL
from library.db.book_repo import BookStore, IsbnLookup
from library.db.user_repo import UserStore
from library.db.loan_repo import LoanStore

__all__ = [
    "Database", "get_db", "reset_db", "SCHEMA_DDL",
    "BookStore", "IsbnLookup", "UserStore", "LoanStore",
]
