from datetime import datetime, timedelta, timezone

import pytest

from record_keeper_api.app.core.errors import ValidationFailed
from record_keeper_api.app.schemas.identity import Identity
from record_keeper_api.app.schemas.record import Record
from record_keeper_api.app.services import query_service
from record_keeper_api.app.services.identity_service import SEED_IDENTITIES

BASE = datetime(2024, 3, 1, tzinfo=timezone.utc)


def make(record_id: str, minutes: int, status: str = "new", user_id: str = "user1") -> Record:
    return Record(
        id=record_id,
        user_id=user_id,
        content=f"content {record_id}",
        timestamp=BASE + timedelta(minutes=minutes),
        status=status,
    )


@pytest.fixture
def sample():
    return [
        make("a", 1, "new"),
        make("b", 5, "completed", "user2"),
        make("c", 3, "in-progress"),
        make("d", 5, "new", "ghost"),
        make("e", 0, "completed"),
    ]


def test_sort_by_recency_newest_first(sample):
    ordered = query_service.sort_by_recency(sample)
    assert [r.id for r in ordered] == ["b", "d", "c", "a", "e"]


def test_sort_by_recency_is_stable_for_equal_timestamps():
    same = [make(f"r{n}", 7) for n in range(5)]
    assert query_service.sort_by_recency(same) == same


def test_sort_by_recency_is_idempotent(sample):
    once = query_service.sort_by_recency(sample)
    assert query_service.sort_by_recency(once) == once


def test_sort_does_not_mutate_input(sample):
    before = list(sample)
    query_service.sort_by_recency(sample)
    assert sample == before


def test_filter_all_returns_everything_in_order(sample):
    assert query_service.filter_by_status(sample, "all") == sample


@pytest.mark.parametrize("status", ["new", "in-progress", "completed"])
def test_filter_by_status_is_exact_subsequence(sample, status):
    filtered = query_service.filter_by_status(sample, status)
    assert all(r.status == status for r in filtered)
    assert filtered == [r for r in sample if r.status == status]


def test_filter_rejects_unknown_status(sample):
    with pytest.raises(ValidationFailed):
        query_service.filter_by_status(sample, "archived")


def test_join_owner_name_left_join(sample):
    joined = query_service.join_owner_name(sample, SEED_IDENTITIES)
    names = {view.id: view.user_name for view in joined}
    assert names["a"] == "John Doe"
    assert names["b"] == "Jane Smith"
    assert names["d"] == "Unknown User"
    assert [v.id for v in joined] == [r.id for r in sample]
    assert joined[0].status_label == "New"


def test_project_records_filters_then_sorts(sample):
    projected = query_service.project_records(sample, SEED_IDENTITIES, "completed")
    assert [r.id for r in projected] == ["b", "e"]
    assert [r.user_name for r in projected] == ["Jane Smith", "John Doe"]


def test_search_identities():
    people = SEED_IDENTITIES + [Identity(id="ops7", name="Olivia Park")]
    assert query_service.search_identities(people, "") == people
    assert [i.id for i in query_service.search_identities(people, "jane")] == ["user2"]
    assert [i.id for i in query_service.search_identities(people, "USER")] == ["user1", "user2", "admin1"]
    assert [i.id for i in query_service.search_identities(people, "ops")] == ["ops7"]
    assert query_service.search_identities(people, "zzz") == []
