"""Domain models for the library core."""

from library.models.book import Book
from library.models.user import User
from library.models.loan import Loan

__all__ = ["Book", "User", "Loan"]
