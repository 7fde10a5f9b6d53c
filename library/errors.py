"""Error taxonomy for the library core.

Every failure raised by the stores and services derives from
``LibraryError`` so the shell can catch them uniformly and print ``str(e)``.
Lookup keys travel on the exception (``e.key``) instead of being folded
into the message.
"""

from __future__ import annotations

from typing import Any, Optional


class LibraryError(Exception):
    """Base class for all library errors."""

    def __init__(self, message: str, key: Any = None):
        super().__init__(message)
        self.message = message
        self.key = key


class ValidationError(LibraryError):
    """Malformed input to an entity constructor or setter."""


class NotFoundError(LibraryError):
    """No row matches the requested id or email."""

    def __init__(self, key: Any, entity: str = "record"):
        super().__init__(f"{entity.capitalize()} {key!r} not found", key=key)
        self.entity = entity


class InvalidStateError(LibraryError):
    """Illegal availability transition (double borrow, double return)."""


class StorageError(LibraryError):
    """Wraps a lower-level ``sqlite3`` fault; ``cause`` is never dropped."""

    def __init__(self, message: str, cause: Optional[BaseException] = None, key: Any = None):
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message, key=key)
        self.cause = cause


class ConflictError(StorageError):
    """Uniqueness violation (ISBN or email).

    Raised by services when a pre-check finds a duplicate, and by stores when
    a ``UNIQUE`` constraint rejects the write.
    """
