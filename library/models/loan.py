"""Loan domain model: who borrowed which book, and when."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional


def utcnow() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass
class Loan:
    """A borrow record.  Open while ``returned_at`` is ``None``."""

    book_id: int
    user_id: int
    borrowed_at: str = field(default_factory=utcnow)
    returned_at: Optional[str] = None
    id: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.returned_at is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "book_id": self.book_id,
            "user_id": self.user_id,
            "borrowed_at": self.borrowed_at,
            "returned_at": self.returned_at,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Loan":
        return cls(
            id=row["id"],
            book_id=row["book_id"],
            user_id=row["user_id"],
            borrowed_at=row.get("borrowed_at", ""),
            returned_at=row.get("returned_at"),
        )
