"""User domain model: a library patron."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class User:
    """A registered library user.  ``email`` is unique across users."""

    name: str
    email: str
    id: Optional[int] = None

    def __str__(self) -> str:
        return f"#{self.id} {self.name} <{self.email}>"

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "email": self.email}

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "User":
        return cls(id=row["id"], name=row["name"], email=row["email"])
