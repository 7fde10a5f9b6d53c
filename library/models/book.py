"""Book domain model: a catalogue entry with a two-state availability flag."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from library.errors import InvalidStateError, ValidationError


def _required_text(field_name: str) -> Callable[[Any], str]:
    def validate(value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"{field_name} must not be empty", key=field_name)
        return value.strip()
    return validate


def _positive_year(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("publication_year must be an integer", key="publication_year")
    if value <= 0:
        raise ValidationError("publication_year must be positive", key="publication_year")
    return value


_VALIDATORS: dict[str, Callable[[Any], Any]] = {
    "title": _required_text("title"),
    "author": _required_text("author"),
    "isbn": _required_text("isbn"),
    "publication_year": _positive_year,
}


@dataclass
class Book:
    """A book in the catalogue.

    ``title``, ``author``, ``isbn`` and ``publication_year`` are validated on
    construction and on every assignment.  ``available`` is only settable at
    construction; afterwards it moves through ``mark_borrowed()`` and
    ``mark_returned()``.
    """

    title: str
    author: str
    isbn: str
    publication_year: int
    available: bool = True
    id: Optional[int] = None

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "available":
            if "available" in self.__dict__:
                raise AttributeError(
                    "available is changed through mark_borrowed()/mark_returned()"
                )
            value = bool(value)
        validator = _VALIDATORS.get(name)
        if validator is not None:
            value = validator(value)
        super().__setattr__(name, value)

    # -- Availability transitions --

    @property
    def is_borrowed(self) -> bool:
        return not self.available

    def mark_borrowed(self) -> None:
        if not self.available:
            raise InvalidStateError("already borrowed", key=self.id)
        object.__setattr__(self, "available", False)

    def mark_returned(self) -> None:
        if self.available:
            raise InvalidStateError("not borrowed", key=self.id)
        object.__setattr__(self, "available", True)

    def __str__(self) -> str:
        state = "available" if self.available else "borrowed"
        return f"#{self.id} {self.title} by {self.author} ({self.publication_year}, ISBN {self.isbn}) [{state}]"

    # -- Serialisation helpers for SQLite rows --

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "publication_year": self.publication_year,
            "available": 1 if self.available else 0,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Book":
        return cls(
            id=row["id"],
            title=row["title"],
            author=row["author"],
            isbn=row["isbn"],
            publication_year=row["publication_year"],
            available=bool(row.get("available", 1)),
        )
