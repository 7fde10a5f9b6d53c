"""Book service: catalogue rules, search, and the borrow/return state machine.

A book is either *Available* or *Borrowed*.  ``borrow_book`` moves it from
Available to Borrowed, ``return_book`` moves it back; any other attempt
raises ``InvalidStateError`` and leaves the row untouched.  Lookups that miss
raise ``NotFoundError`` carrying the requested id.
"""

from __future__ import annotations

import logging
from typing import Optional

from library.db.book_repo import BookStore
from library.db.database import Database, storage_errors
from library.db.loan_repo import LoanStore
from library.errors import ConflictError, InvalidStateError
from library.models.book import Book
from library.models.loan import Loan
from library.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


class BookService:
    """
    Facade for book CRUD, search, and lending.

    The notifier is injected so callers can plug in a real delivery channel
    or leave it out entirely.
    """

    def __init__(self, db: Database, notifier: Optional[NotificationService] = None):
        self._db = db
        self._book_store = BookStore(db)
        self._loan_store = LoanStore(db)
        self._notifier = notifier

    # -- CRUD ------------------------------------------------------------------

    def get_all_books(self) -> list[Book]:
        return self._book_store.find_all()

    def get_book_by_id(self, book_id: int) -> Book:
        return self._book_store.find_by_id(book_id)

    def add_book(self, book: Book) -> Book:
        """Save ``book`` unless another book already uses its ISBN."""
        if self.search_by_isbn(book.isbn):
            raise ConflictError("isbn already exists", key=book.isbn)
        self._book_store.save(book)
        logger.info(f"Added book {book.id}: {book.title}")
        return book

    def update_book(self, book: Book) -> Book:
        self._book_store.find_by_id(book.id)
        clash = [b for b in self.search_by_isbn(book.isbn) if b.id != book.id]
        if clash:
            raise ConflictError("isbn already exists", key=book.isbn)
        self._book_store.update(book)
        logger.info(f"Updated book {book.id}: {book.title}")
        return book

    def delete_book(self, book_id: int) -> None:
        self._book_store.delete(book_id)
        logger.info(f"Deleted book {book_id}")

    # -- Search ----------------------------------------------------------------

    def search_by_title(self, term: str) -> list[Book]:
        needle = term.lower()
        return [b for b in self._book_store.find_all() if needle in b.title.lower()]

    def search_by_author(self, term: str) -> list[Book]:
        needle = term.lower()
        return [b for b in self._book_store.find_all() if needle in b.author.lower()]

    def search_by_isbn(self, term: str) -> list[Book]:
        needle = term.strip().lower()
        return [b for b in self._book_store.find_all() if b.isbn.lower() == needle]

    # -- Lending ---------------------------------------------------------------

    def borrow_book(self, book_id: int, user_id: int) -> Book:
        book = self._book_store.find_by_id(book_id)
        book.mark_borrowed()
        # Availability flip and loan record commit together or not at all.
        with storage_errors(f"Could not borrow book {book_id}", key=book_id), self._db.transaction():
            if not self._book_store.set_availability(book_id, False):
                raise InvalidStateError("already borrowed", key=book_id)
            loan = self._loan_store.open_loan(book_id, user_id)
        logger.info(f"Book {book_id} borrowed by user {user_id} (loan {loan.id})")
        self._notify(user_id, f"You borrowed '{book.title}'", book_id)
        return book

    def return_book(self, book_id: int) -> Book:
        book = self._book_store.find_by_id(book_id)
        book.mark_returned()
        with storage_errors(f"Could not return book {book_id}", key=book_id), self._db.transaction():
            if not self._book_store.set_availability(book_id, True):
                raise InvalidStateError("not borrowed", key=book_id)
            loan = self._loan_store.close_loan(book_id)
        logger.info(f"Book {book_id} returned")
        if loan is not None:
            self._notify(loan.user_id, f"You returned '{book.title}'", book_id)
        return book

    def get_active_loan(self, book_id: int) -> Optional[Loan]:
        return self._loan_store.find_open_for_book(book_id)

    def get_loans_for_user(self, user_id: int, open_only: bool = False) -> list[Loan]:
        return self._loan_store.find_by_user(user_id, open_only=open_only)

    # -- internal --------------------------------------------------------------

    def _notify(self, user_id: int, message: str, book_id: int) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier.send_notification_with_book(user_id, message, book_id)
        except Exception as e:
            logger.warning(f"Notification to user {user_id} failed: {e}")
