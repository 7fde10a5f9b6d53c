"""Database schema DDL: table definitions for the library core."""

# ==========================================================================
# Books
# ==========================================================================
BOOKS_DDL = """
CREATE TABLE IF NOT EXISTS books (
    id                  INTEGER PRIMARY KEY AUTOINCREMENT,
    title               TEXT NOT NULL,
    author              TEXT NOT NULL,
    isbn                TEXT NOT NULL UNIQUE COLLATE NOCASE,
    publication_year    INTEGER NOT NULL CHECK(publication_year > 0),
    available           INTEGER NOT NULL DEFAULT 1 CHECK(available IN (0, 1))
);

CREATE INDEX IF NOT EXISTS idx_books_title ON books(title);
CREATE INDEX IF NOT EXISTS idx_books_author ON books(author);
"""

# ==========================================================================
# Users
# ==========================================================================
USERS_DDL = """
CREATE TABLE IF NOT EXISTS users (
    id      INTEGER PRIMARY KEY AUTOINCREMENT,
    name    TEXT NOT NULL,
    email   TEXT NOT NULL UNIQUE
);
"""

# ==========================================================================
# Loans (borrow records; user_id is not a foreign key)
# ==========================================================================
LOANS_DDL = """
CREATE TABLE IF NOT EXISTS loans (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    book_id     INTEGER NOT NULL REFERENCES books(id) ON DELETE CASCADE,
    user_id     INTEGER NOT NULL,
    borrowed_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    returned_at TEXT
);

CREATE INDEX IF NOT EXISTS idx_loans_book ON loans(book_id);
CREATE INDEX IF NOT EXISTS idx_loans_user ON loans(user_id);
"""

SCHEMA_DDL = BOOKS_DDL + USERS_DDL + LOANS_DDL
