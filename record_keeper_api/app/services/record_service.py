"""
Business logic for request records.

This module implements the record lifecycle: creating a request,
responding to it with a status, correcting the status alone and
listing records.  Records are frozen models held in an insertion-ordered
mapping; every mutation builds a new ``Record`` and swaps it in under
the store lock (copy-on-write), so a reader sees either the old or the
new record and never a mix of both.

Status transitions only happen through :meth:`RecordStore.respond` and
:meth:`RecordStore.set_status`.  ``response`` and ``response_timestamp``
are set together, and only by ``respond``.
"""

import itertools
import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

from ..core.errors import NotFound, ValidationFailed
from ..schemas.record import RECORD_STATUSES, Record
from .identity_service import IdentityStore


logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


# Demo records loaded alongside ``SEED_IDENTITIES``.
SEED_RECORDS: List[Record] = [
    Record(id="rec1", user_id="user1", content="Initial balance deposit", timestamp=_parse_ts("2023-01-15T10:30:00Z")),
    Record(id="rec2", user_id="user1", content="Monthly report submitted", timestamp=_parse_ts("2023-02-05T14:22:00Z")),
    Record(id="rec3", user_id="user2", content="Project completion request", timestamp=_parse_ts("2023-02-10T09:45:00Z")),
]


class RecordStore:
    """In-memory store for records.

    Parameters
    ----------
    identities : IdentityStore
        Used to check record owners at creation time.
    records : Iterable[Record], optional
        Initial records, kept in the given order.
    clock : Callable[[], datetime], optional
        Source of timestamps; defaults to the current UTC time.
    """

    ID_PREFIX = "rec"

    def __init__(
        self,
        identities: IdentityStore,
        records: Optional[Iterable[Record]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._identities = identities
        self._clock = clock or _utcnow
        self._lock = threading.RLock()
        self._records: dict[str, Record] = {}
        self._ids = itertools.count(1)
        for record in records or ():
            if record.id in self._records:
                raise ValueError(f"Duplicate record id {record.id!r}")
            self._records[record.id] = record

    def __len__(self) -> int:
        return len(self._records)

    def _next_id(self) -> str:
        # Counter only moves forward, so ids are never reused even if
        # seeded records already occupy some of them.
        while True:
            candidate = f"{self.ID_PREFIX}{next(self._ids)}"
            if candidate not in self._records:
                return candidate

    @staticmethod
    def _check_status(status: str) -> None:
        if status not in RECORD_STATUSES:
            raise ValidationFailed(f"Unknown status {status!r}")

    def create(self, user_id: str, content: str) -> Record:
        """Create a new record in status ``new``.

        Owners that do not resolve to a known identity are accepted;
        such records display as "Unknown User".

        Raises
        ------
        ValidationFailed
            If ``content`` is empty after trimming whitespace.
        """
        if content is None or not content.strip():
            raise ValidationFailed("Request content cannot be empty")
        if self._identities.find_by_id(user_id) is None:
            logger.warning("Creating record for unknown user %s", user_id)
        with self._lock:
            record = Record(
                id=self._next_id(),
                user_id=user_id,
                content=content,
                timestamp=self._clock(),
                status="new",
            )
            self._records[record.id] = record
        logger.info("Record %s created for %s", record.id, user_id)
        return record

    def get(self, record_id: str) -> Record:
        record = self._records.get(record_id)
        if record is None:
            raise NotFound(f"Record {record_id} not found")
        return record

    def respond(self, record_id: str, response_text: str, new_status: str) -> Record:
        """Attach an admin response and set the status in one step.

        ``response``, ``response_timestamp`` and ``status`` change
        together or not at all.

        Raises
        ------
        ValidationFailed
            If the response text is empty after trimming, or the status
            is unknown.  The stored record is left unchanged.
        NotFound
            If the record does not exist.
        """
        if response_text is None or not response_text.strip():
            raise ValidationFailed("Response cannot be empty")
        self._check_status(new_status)
        with self._lock:
            current = self.get(record_id)
            updated = current.model_copy(
                update={
                    "response": response_text,
                    "response_timestamp": self._clock(),
                    "status": new_status,
                }
            )
            self._records[record_id] = updated
        logger.info("Record %s answered, status %s -> %s", record_id, current.status, new_status)
        return updated

    def set_status(self, record_id: str, new_status: str) -> Record:
        """Change the status only; the response fields are untouched."""
        self._check_status(new_status)
        with self._lock:
            current = self.get(record_id)
            updated = current.model_copy(update={"status": new_status})
            self._records[record_id] = updated
        logger.info("Record %s status %s -> %s", record_id, current.status, new_status)
        return updated

    def list_for_owner(self, user_id: str) -> List[Record]:
        """All records owned by ``user_id``.  Ordering is left to callers."""
        with self._lock:
            return [r for r in self._records.values() if r.user_id == user_id]

    def list_all(self) -> List[Record]:
        with self._lock:
            return list(self._records.values())
