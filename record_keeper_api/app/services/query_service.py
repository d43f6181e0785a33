"""
Read-only projections over record and identity snapshots.

Everything here is a pure function: inputs are never mutated and the
result is recomputed on every call, so a projection taken after a store
mutation always reflects it.  Views apply the filter before the sort.
"""

from typing import Iterable, List, Sequence

from ..core.errors import ValidationFailed
from ..schemas.identity import UNKNOWN_USER_NAME, Identity
from ..schemas.record import RECORD_STATUSES, STATUS_ALL, Record, RecordView


def sort_by_recency(records: Iterable[Record]) -> List[Record]:
    """Newest first.  Records with equal timestamps keep their relative order."""
    # sorted() is stable, and reverse=True keeps equal keys in input order.
    return sorted(records, key=lambda r: r.timestamp, reverse=True)


def filter_by_status(records: Iterable[Record], status: str = STATUS_ALL) -> List[Record]:
    """Keep records in ``status``; the ``"all"`` sentinel keeps everything."""
    if status == STATUS_ALL:
        return list(records)
    if status not in RECORD_STATUSES:
        raise ValidationFailed(f"Unknown status filter {status!r}")
    return [r for r in records if r.status == status]


def join_owner_name(records: Iterable[Record], identities: Iterable[Identity]) -> List[RecordView]:
    """Left join records with identities to add ``user_name``."""
    names = {identity.id: identity.name for identity in identities}
    return [
        RecordView(
            **record.model_dump(exclude={"status_label"}),
            user_name=names.get(record.user_id, UNKNOWN_USER_NAME),
        )
        for record in records
    ]


def search_identities(identities: Iterable[Identity], term: str = "") -> List[Identity]:
    """Case-insensitive substring match on name or id."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(identities)
    return [i for i in identities if needle in i.name.lower() or needle in i.id.lower()]


def project_records(
    records: Iterable[Record],
    identities: Sequence[Identity],
    status: str = STATUS_ALL,
) -> List[RecordView]:
    """Filter, then sort by recency, then join owner names."""
    return join_owner_name(sort_by_recency(filter_by_status(records, status)), identities)
