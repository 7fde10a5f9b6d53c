"""
Central configuration loader.
Reads from environment variables (via .env); falls back to local defaults.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Load .env from repo root (if present)
# ---------------------------------------------------------------------------
_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env")


def _get(key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    val = os.getenv(key, default)
    if required and not val:
        raise EnvironmentError(f"Missing required environment variable: {key}")
    return val


def _get_float(key: str, default: float) -> float:
    raw = _get(key)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring {key}={raw!r}: not a number, using {default}")
        return default


# ---------------------------------------------------------------------------
# Database config
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class DatabaseConfig:
    path: Path
    foreign_keys: bool = True
    timeout: float = 5.0


def get_database_config() -> DatabaseConfig:
    return DatabaseConfig(
        path=get_db_path(),
        foreign_keys=_get("LIBRARY_DB_FOREIGN_KEYS", default="true").lower() in ("1", "true", "yes"),  # type: ignore[union-attr]
        timeout=_get_float("LIBRARY_DB_TIMEOUT", default=5.0),
    )


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
def get_log_level() -> str:
    return (_get("LIBRARY_LOG_LEVEL", default="INFO") or "INFO").upper()


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
def get_repo_root() -> Path:
    return _REPO_ROOT


def get_db_path() -> Path:
    raw = _get("LIBRARY_DB_PATH")
    if raw:
        return Path(raw)
    return _REPO_ROOT / "data" / "library.db"
