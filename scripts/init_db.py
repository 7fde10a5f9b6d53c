#!/usr/bin/env python3
"""Initialize the database and optionally seed it with books and users from YAML."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from library.config import get_log_level
from library.db.database import Database
from library.errors import LibraryError
from library.models.book import Book
from library.models.user import User
from library.services.book_service import BookService
from library.services.user_service import UserService


def main():
    parser = argparse.ArgumentParser(description="Initialize the library database")
    parser.add_argument("--seed", type=str, help="YAML file with 'books' and 'users' lists")
    parser.add_argument("--db-path", type=str, help="Override database path")
    args = parser.parse_args()

    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    db_path = Path(args.db_path) if args.db_path else None
    with Database(path=db_path) as db:
        db.init()
        print(f"Database initialized at: {db.path}")
        if args.seed:
            seed(db, Path(args.seed))
    print("Done.")


def seed(db: Database, path: Path) -> tuple[int, int]:
    """Load books and users from ``path``; entries that fail are skipped."""
    import yaml
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    books = BookService(db)
    added_books = 0
    for b in data.get("books", []):
        try:
            book = Book(
                title=b["title"],
                author=b["author"],
                isbn=str(b["isbn"]),
                publication_year=b["publication_year"],
            )
            books.add_book(book)
            added_books += 1
            print(f"  Added book: {book}")
        except (KeyError, LibraryError) as e:
            print(f"  Skipping book {b.get('title', '?')}: {e}")

    users = UserService(db)
    added_users = 0
    for u in data.get("users", []):
        try:
            user = User(name=u["name"], email=u["email"])
            users.add_user(user)
            added_users += 1
            print(f"  Added user: {user}")
        except (KeyError, LibraryError) as e:
            print(f"  Skipping user {u.get('name', '?')}: {e}")

    return added_books, added_users


if __name__ == "__main__":
    main()
