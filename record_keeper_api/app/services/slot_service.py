"""
Service layer for key‑value slots.

Slots are string values stored under a key in the ``session_slots``
table.  The session uses a single slot to remember the signed-in
identity across restarts.  This is a convenience only and carries no
security guarantees.
"""

import logging
from typing import Optional

from ..core.db import get_connection, init_db


class SlotService:
    """Read and write key‑value slots in the session database."""

    def __init__(self, db_url: Optional[str] = None) -> None:
        self.db_url = db_url
        init_db(db_url)

    def get(self, key: str) -> Optional[str]:
        """Return the value stored under ``key`` or ``None``."""
        conn = get_connection(self.db_url)
        try:
            cursor = conn.cursor()
            row = cursor.execute("SELECT value FROM session_slots WHERE key = ?", (key,)).fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        """Insert or replace the value under ``key``."""
        logger = logging.getLogger(__name__)
        conn = get_connection(self.db_url)
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO session_slots (key, value) VALUES (?, ?)"
                " ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP",
                (key, value),
            )
            conn.commit()
            logger.debug("Slot %s written", key)
        finally:
            conn.close()

    def delete(self, key: str) -> None:
        """Remove ``key``.  Missing keys are ignored."""
        conn = get_connection(self.db_url)
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM session_slots WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()
