"""
Database connection management for the fact store API.

Provides a get_db() dependency that opens a per-request SQLite connection and
closes it after the response is sent.  The database path is resolved at
import time from the APP_DB_PATH environment variable (default:
facts.sqlite) and may be overridden by create_app(db_path=...).

The ``facts`` table keeps the camelCase vote column names the board client
speaks on the wire, so rows can be returned without renaming.
"""

import os
import sqlite3
from collections.abc import Generator
from pathlib import Path

from fastapi import HTTPException

_DB_PATH: Path = Path(os.getenv("APP_DB_PATH", "facts.sqlite"))

SCHEMA = """
CREATE TABLE IF NOT EXISTS facts (
    id               INTEGER PRIMARY KEY AUTOINCREMENT,
    created_at       TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
    text             TEXT    NOT NULL,
    source           TEXT    NOT NULL,
    category         TEXT    NOT NULL,
    votesInteresting INTEGER NOT NULL DEFAULT 0,
    votesMindblowing INTEGER NOT NULL DEFAULT 0,
    votesFalse       INTEGER NOT NULL DEFAULT 0
);
CREATE INDEX IF NOT EXISTS idx_facts_category ON facts(category);
CREATE INDEX IF NOT EXISTS idx_facts_votes_interesting ON facts(votesInteresting DESC);
"""

FACT_COLUMNS = (
    "id, created_at, text, source, category, "
    "votesInteresting, votesMindblowing, votesFalse"
)


def get_db_path() -> Path:
    """Return the configured database path."""
    return _DB_PATH


def set_db_path(db_path: Path) -> None:
    """Point the API at a different database file."""
    global _DB_PATH
    _DB_PATH = Path(db_path)


def _make_conn(db_path: Path) -> sqlite3.Connection:
    """Open a SQLite connection with standard pragmas."""
    conn = sqlite3.connect(str(db_path), check_same_thread=False, timeout=10)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA synchronous=NORMAL")
    conn.execute("PRAGMA busy_timeout=5000")
    return conn


def init_db(db_path: Path | None = None) -> Path:
    """Create the database file and the facts schema if they do not exist.

    Returns:
        The path that was initialized.
    """
    path = Path(db_path) if db_path is not None else _DB_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = _make_conn(path)
    try:
        conn.executescript(SCHEMA)
        conn.commit()
    finally:
        conn.close()
    return path


def row_to_dict(row: sqlite3.Row) -> dict:
    return {key: row[key] for key in row.keys()}


def get_db() -> Generator[sqlite3.Connection, None, None]:
    """FastAPI dependency: yield a SQLite connection, close on exit.

    Raises HTTP 503 with a friendly message if the database file is missing,
    instead of silently creating an empty one.

    Usage in a route::

        from api.database import get_db
        from fastapi import Depends

        @router.get("/example")
        def example(conn=Depends(get_db)):
            ...
    """
    if not _DB_PATH.exists():
        raise HTTPException(
            status_code=503,
            detail=(
                f"Database not found at '{_DB_PATH}'. "
                "Run 'python scripts/seed_facts.py' or start the API once to create it."
            ),
        )
    conn = _make_conn(_DB_PATH)
    try:
        yield conn
    finally:
        conn.close()
