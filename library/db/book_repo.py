"""Repository for the ``books`` table: full CRUD with ACID transactions."""

from __future__ import annotations

import logging
import sqlite3
from enum import Enum
from typing import Optional

from library.db.database import Database, storage_errors
from library.errors import NotFoundError, StorageError
from library.models.book import Book

logger = logging.getLogger(__name__)

_COLUMNS = "id, title, author, isbn, publication_year, available"


class IsbnLookup(str, Enum):
    FOUND = "found"
    ABSENT = "absent"
    UNKNOWN = "unknown"


class BookStore:
    """Single-Responsibility repository for book persistence."""

    def __init__(self, db: Database):
        self._db = db

    # -- Create ----------------------------------------------------------------

    def save(self, book: Book) -> Book:
        """Insert a new book and write the generated id back onto ``book``."""
        with storage_errors(f"Could not save book {book.isbn!r}", key=book.isbn):
            with self._db.transaction() as conn:
                cursor = conn.execute(
                    """INSERT INTO books
                       (title, author, isbn, publication_year, available)
                       VALUES (?, ?, ?, ?, ?)""",
                    (
                        book.title, book.author, book.isbn,
                        book.publication_year, 1 if book.available else 0,
                    ),
                )
        if cursor.lastrowid is None:
            raise StorageError(f"Could not save book {book.isbn!r}: no id generated")
        book.id = cursor.lastrowid
        logger.debug(f"Saved book {book.id}: {book.title}")
        return book

    # -- Read ------------------------------------------------------------------

    def find_all(self) -> list[Book]:
        with storage_errors("Could not load books"):
            rows = self._db.fetchall(f"SELECT {_COLUMNS} FROM books ORDER BY id")
        logger.debug(f"Found {len(rows)} books")
        return [Book.from_row(r) for r in rows]

    def find_by_id(self, book_id: int) -> Book:
        with storage_errors(f"Could not load book {book_id}", key=book_id):
            row = self._db.fetchone(f"SELECT {_COLUMNS} FROM books WHERE id = ?", (book_id,))
        if row is None:
            raise NotFoundError(book_id, "book")
        return Book.from_row(row)

    def find_by_isbn(self, isbn: str) -> Optional[Book]:
        """Case-insensitive exact ISBN lookup."""
        with storage_errors(f"Could not look up ISBN {isbn!r}", key=isbn):
            row = self._db.fetchone(
                f"SELECT {_COLUMNS} FROM books WHERE isbn = ? COLLATE NOCASE", (isbn.strip(),)
            )
        return Book.from_row(row) if row else None

    def search_title(self, term: str) -> list[Book]:
        """Case-insensitive partial match on title."""
        return self._search("title", term)

    def search_author(self, term: str) -> list[Book]:
        """Case-insensitive partial match on author."""
        return self._search("author", term)

    def isbn_exists(self, isbn: str) -> bool:
        """True if a book with ``isbn`` exists.  Storage faults read as ``False``."""
        return self.lookup_isbn(isbn) is IsbnLookup.FOUND

    def lookup_isbn(self, isbn: str) -> IsbnLookup:
        try:
            row = self._db.fetchone(
                "SELECT COUNT(*) AS n FROM books WHERE isbn = ? COLLATE NOCASE", (isbn.strip(),)
            )
        except (StorageError, sqlite3.Error) as e:
            logger.warning(f"Could not check ISBN {isbn!r}: {e}")
            return IsbnLookup.UNKNOWN
        return IsbnLookup.FOUND if row and row["n"] > 0 else IsbnLookup.ABSENT

    # -- Update ----------------------------------------------------------------

    def update(self, book: Book) -> Book:
        """Replace every mutable column of the row matching ``book.id``."""
        with storage_errors(f"Could not update book {book.id}", key=book.id):
            with self._db.transaction() as conn:
                cursor = conn.execute(
                    """UPDATE books SET
                           title = ?, author = ?, isbn = ?,
                           publication_year = ?, available = ?
                       WHERE id = ?""",
                    (
                        book.title, book.author, book.isbn,
                        book.publication_year, 1 if book.available else 0,
                        book.id,
                    ),
                )
                if cursor.rowcount == 0:
                    raise NotFoundError(book.id, "book")
        logger.debug(f"Updated book {book.id}")
        return book

    def set_availability(self, book_id: int, available: bool) -> bool:
        """
        Conditionally flip ``available``.  The row is only touched when it
        currently holds the opposite value; returns whether it was.
        """
        with storage_errors(f"Could not update availability of book {book_id}", key=book_id):
            with self._db.transaction() as conn:
                cursor = conn.execute(
                    "UPDATE books SET available = ? WHERE id = ? AND available = ?",
                    (1 if available else 0, book_id, 0 if available else 1),
                )
        return cursor.rowcount > 0

    # -- Delete ----------------------------------------------------------------

    def delete(self, book_id: int) -> None:
        with storage_errors(f"Could not delete book {book_id}", key=book_id):
            with self._db.transaction() as conn:
                cursor = conn.execute("DELETE FROM books WHERE id = ?", (book_id,))
                if cursor.rowcount == 0:
                    raise NotFoundError(book_id, "book")
        logger.debug(f"Deleted book {book_id}")

    # -- internal --------------------------------------------------------------

    def _search(self, column: str, term: str) -> list[Book]:
        with storage_errors(f"Could not search books by {column}"):
            rows = self._db.fetchall(
                f"SELECT {_COLUMNS} FROM books WHERE LOWER({column}) LIKE ? ORDER BY id",
                (f"%{term.lower()}%",),
            )
        return [Book.from_row(r) for r in rows]
