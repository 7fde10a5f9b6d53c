"""Repository for the ``loans`` table: borrow records."""

from __future__ import annotations

from typing import Optional

from library.db.database import Database, storage_errors
from library.errors import StorageError
from library.models.loan import Loan, utcnow

_COLUMNS = "id, book_id, user_id, borrowed_at, returned_at"


class LoanStore:
    """Open and close borrow records; at most one open loan per book."""

    def __init__(self, db: Database):
        self._db = db

    def open_loan(self, book_id: int, user_id: int) -> Loan:
        loan = Loan(book_id=book_id, user_id=user_id)
        with storage_errors(f"Could not record loan of book {book_id}", key=book_id):
            with self._db.transaction() as conn:
                cursor = conn.execute(
                    "INSERT INTO loans (book_id, user_id, borrowed_at) VALUES (?, ?, ?)",
                    (loan.book_id, loan.user_id, loan.borrowed_at),
                )
        if cursor.lastrowid is None:
            raise StorageError(f"Could not record loan of book {book_id}: no id generated")
        loan.id = cursor.lastrowid
        return loan

    def close_loan(self, book_id: int) -> Optional[Loan]:
        """Stamp ``returned_at`` on the open loan for ``book_id``, if any."""
        loan = self.find_open_for_book(book_id)
        if loan is None:
            return None
        loan.returned_at = utcnow()
        with storage_errors(f"Could not close loan of book {book_id}", key=book_id):
            with self._db.transaction() as conn:
                conn.execute(
                    "UPDATE loans SET returned_at = ? WHERE id = ?",
                    (loan.returned_at, loan.id),
                )
        return loan

    def find_open_for_book(self, book_id: int) -> Optional[Loan]:
        with storage_errors(f"Could not load loans of book {book_id}", key=book_id):
            row = self._db.fetchone(
                f"""SELECT {_COLUMNS} FROM loans
                    WHERE book_id = ? AND returned_at IS NULL
                    ORDER BY id DESC LIMIT 1""",
                (book_id,),
            )
        return Loan.from_row(row) if row else None

    def find_by_user(self, user_id: int, open_only: bool = False) -> list[Loan]:
        where = "user_id = ?" + (" AND returned_at IS NULL" if open_only else "")
        with storage_errors(f"Could not load loans of user {user_id}", key=user_id):
            rows = self._db.fetchall(
                f"SELECT {_COLUMNS} FROM loans WHERE {where} ORDER BY id", (user_id,)
            )
        return [Loan.from_row(r) for r in rows]

    def find_all(self, open_only: bool = False) -> list[Loan]:
        where = " WHERE returned_at IS NULL" if open_only else ""
        with storage_errors("Could not load loans"):
            rows = self._db.fetchall(f"SELECT {_COLUMNS} FROM loans{where} ORDER BY id")
        return [Loan.from_row(r) for r in rows]
