import threading

import pytest

from record_keeper_api.app.core.errors import NotFound, ValidationFailed
from record_keeper_api.app.services.identity_service import IdentityStore
from record_keeper_api.app.services.record_service import SEED_RECORDS, RecordStore


def test_create_starts_new_without_response(records: RecordStore, clock):
    expected_ts = clock.now
    record = records.create("user1", "Need a report")
    assert record.status == "new"
    assert record.response is None
    assert record.response_timestamp is None
    assert record.user_id == "user1"
    assert record.content == "Need a report"
    assert record.timestamp == expected_ts
    assert records.get(record.id) == record


def test_create_assigns_distinct_ids(records: RecordStore):
    ids = [records.create("user1", f"request {n}").id for n in range(20)]
    assert len(set(ids)) == 20
    assert ids[:3] == ["rec1", "rec2", "rec3"]


def test_ids_skip_seeded_records(identities: IdentityStore, clock):
    store = RecordStore(identities, SEED_RECORDS, clock=clock)
    created = store.create("user2", "another")
    assert created.id not in {r.id for r in SEED_RECORDS}
    assert len(store) == len(SEED_RECORDS) + 1


@pytest.mark.parametrize("content", ["", "   ", "\n\t"])
def test_create_rejects_blank_content(records: RecordStore, content):
    with pytest.raises(ValidationFailed):
        records.create("user1", content)
    assert len(records) == 0


def test_create_tolerates_unknown_owner(records: RecordStore, caplog):
    with caplog.at_level("WARNING"):
        record = records.create("ghost", "orphan request")
    assert record.user_id == "ghost"
    assert "unknown user ghost" in caplog.text


def test_respond_sets_response_status_and_timestamp(records: RecordStore):
    record = records.create("user1", "Need a report")
    updated = records.respond(record.id, "Approved", "completed")
    assert updated.status == "completed"
    assert updated.response == "Approved"
    assert updated.response_timestamp is not None
    assert updated.response_timestamp > record.timestamp
    assert records.get(record.id) == updated
    # copy-on-write: the earlier snapshot is unchanged
    assert record.status == "new"
    assert record.response is None


@pytest.mark.parametrize("text", ["", "  "])
def test_respond_with_blank_text_is_a_no_op(records: RecordStore, text):
    record = records.create("user1", "Need a report")
    with pytest.raises(ValidationFailed):
        records.respond(record.id, text, "completed")
    assert records.get(record.id) == record


def test_respond_with_unknown_status_is_a_no_op(records: RecordStore):
    record = records.create("user1", "Need a report")
    with pytest.raises(ValidationFailed):
        records.respond(record.id, "ok", "archived")
    assert records.get(record.id) == record


def test_respond_unknown_record(records: RecordStore):
    with pytest.raises(NotFound):
        records.respond("rec404", "ok", "completed")


def test_set_status_keeps_response(records: RecordStore):
    record = records.create("user1", "Need a report")
    answered = records.respond(record.id, "Looking into it", "in-progress")
    corrected = records.set_status(record.id, "new")
    assert corrected.status == "new"
    assert corrected.response == answered.response
    assert corrected.response_timestamp == answered.response_timestamp


def test_set_status_on_unanswered_record_leaves_response_unset(records: RecordStore):
    record = records.create("user1", "Need a report")
    updated = records.set_status(record.id, "in-progress")
    assert updated.response is None
    assert updated.response_timestamp is None


def test_set_status_unknown_record(records: RecordStore):
    with pytest.raises(NotFound):
        records.set_status("rec404", "completed")


def test_list_for_owner_and_list_all(records: RecordStore):
    a = records.create("user1", "a")
    b = records.create("user2", "b")
    c = records.create("user1", "c")
    assert records.list_for_owner("user1") == [a, c]
    assert records.list_for_owner("user2") == [b]
    assert records.list_for_owner("admin1") == []
    assert records.list_all() == [a, b, c]


def test_concurrent_creates_get_unique_ids(identities: IdentityStore):
    store = RecordStore(identities)
    created = []
    lock = threading.Lock()

    def worker():
        for n in range(50):
            record = store.create("user1", f"item {n}")
            with lock:
                created.append(record.id)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(created) == 200
    assert len(set(created)) == 200
    assert len(store) == 200
