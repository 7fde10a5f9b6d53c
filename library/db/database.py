"""Core database connection with lazy (re)connect and ACID transaction support."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator, Optional

from library.config import DatabaseConfig, get_database_config
from library.db.schema import SCHEMA_DDL
from library.errors import ConflictError, StorageError

logger = logging.getLogger(__name__)

MEMORY = ":memory:"


class Database:
    """
    SQLite connection owner.

    Holds the single handle shared by every store.  ``connection()`` opens it
    lazily and re-opens it if it was closed; ``close()`` (or leaving a
    ``with Database(...)`` block) releases it.  Every mutation goes through
    ``transaction()``, which commits on success and rolls back on failure.
    """

    def __init__(self, path: Optional[Path | str] = None, config: Optional[DatabaseConfig] = None):
        self.config: DatabaseConfig = config or get_database_config()
        if path is None:
            self.path: Path | str = self.config.path
        elif isinstance(path, str) and path != MEMORY:
            self.path = Path(path)
        else:
            self.path = path
        self._conn: Optional[sqlite3.Connection] = None
        self._in_transaction = False

    # -- connection lifecycle --------------------------------------------------

    def _ensure_dir(self) -> None:
        if isinstance(self.path, Path):
            self.path.parent.mkdir(parents=True, exist_ok=True)

    def _open(self) -> sqlite3.Connection:
        try:
            self._ensure_dir()
            conn = sqlite3.connect(
                str(self.path), timeout=self.config.timeout, check_same_thread=False
            )
            conn.row_factory = sqlite3.Row
            if self.config.foreign_keys:
                conn.execute("PRAGMA foreign_keys = ON")
            conn.execute("PRAGMA journal_mode = WAL")
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Could not open database at {self.path}", cause=e) from e
        logger.debug(f"Opened database connection to {self.path}")
        return conn

    def is_alive(self) -> bool:
        """True when a handle exists and still answers a trivial query."""
        if self._conn is None:
            return False
        try:
            self._conn.execute("SELECT 1")
        except sqlite3.Error:
            return False
        return True

    def _handle_open(self) -> bool:
        if self._conn is None:
            return False
        try:
            # Reading connection state raises on a closed handle without running SQL.
            self._conn.in_transaction
        except sqlite3.ProgrammingError:
            return False
        return True

    def connection(self) -> sqlite3.Connection:
        if not self._handle_open():
            if self._conn is not None:
                logger.info(f"Database connection to {self.path} was closed; reconnecting")
            self._conn = self._open()
        return self._conn

    def close(self) -> None:
        if self._conn:
            try:
                self._conn.close()
            finally:
                self._conn = None
            logger.debug(f"Closed database connection to {self.path}")

    def init(self) -> None:
        """Create all tables (idempotent)."""
        self.executescript(SCHEMA_DDL)

    def __enter__(self) -> "Database":
        self.connection()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -- transaction helpers ---------------------------------------------------

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """
        ACID transaction: commits on success, rolls back on exception.

        A ``transaction()`` opened inside another one joins it: only the
        outermost block commits or rolls back.
        """
        conn = self.connection()
        if self._in_transaction:
            yield conn
            return
        self._in_transaction = True
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._in_transaction = False

    # -- low-level query helpers -----------------------------------------------

    def executescript(self, script: str) -> None:
        with storage_errors("Could not apply schema"):
            conn = self.connection()
            conn.executescript(script)
            conn.commit()

    def execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        return self.connection().execute(sql, params)

    def fetchone(self, sql: str, params: tuple = ()) -> Optional[dict[str, Any]]:
        row = self.connection().execute(sql, params).fetchone()
        return dict(row) if row else None

    def fetchall(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        rows = self.connection().execute(sql, params).fetchall()
        return [dict(r) for r in rows]


@contextmanager
def storage_errors(action: str, key: Any = None) -> Generator[None, None, None]:
    """Re-raise ``sqlite3`` faults as ``StorageError`` (``ConflictError`` for UNIQUE)."""
    try:
        yield
    except sqlite3.IntegrityError as e:
        if "UNIQUE" in str(e):
            raise ConflictError(f"{action}: duplicate value", cause=e, key=key) from e
        raise StorageError(action, cause=e, key=key) from e
    except sqlite3.Error as e:
        raise StorageError(action, cause=e, key=key) from e


# -- module singleton ----------------------------------------------------------

_default_db: Optional[Database] = None


def get_db(path: Optional[Path] = None) -> Database:
    """Return (and lazily initialise) the module-level Database singleton."""
    global _default_db
    if _default_db is None:
        _default_db = Database(path)
        _default_db.init()
    return _default_db


def reset_db() -> None:
    """Close and discard the singleton (useful in tests)."""
    global _default_db
    if _default_db is not None:
        _default_db.close()
        _default_db = None
