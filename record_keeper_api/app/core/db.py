"""
SQLite integration for the session slot and a simple migration system.

Identities and records live in memory only.  The one thing that
survives a restart is the session marker, which is kept in a tiny
key‑value table.  This module provides functions for obtaining a
connection (``get_connection``) and applying migrations on start-up
(``init_db``).

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: key-value slots
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS session_slots (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
]


def get_database_path(db_url: str | None = None) -> str:
    """Compute the path to the SQLite database file.

    If ``db_url`` (or ``settings.session_db_path``) is an absolute path,
    use it directly.  Otherwise resolve it relative to the project root.
    """
    db_url = db_url or settings.session_db_path
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent  # project root
    return str((base_dir / db_url).resolve())


def get_connection(db_url: str | None = None) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name.
    """
    conn = sqlite3.connect(get_database_path(db_url))
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(db_url: str | None = None) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection(db_url)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db(db_url: str | None = None) -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  New migrations are appended with an incremented
    version number.
    """
    with get_cursor(db_url) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
