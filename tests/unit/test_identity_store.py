import math

import pytest

from record_keeper_api.app.core.errors import InvalidCredentials, NotFound, ValidationFailed
from record_keeper_api.app.schemas.identity import Identity
from record_keeper_api.app.services.identity_service import IdentityStore, parse_balance


def test_find_by_id_exact_match(identities: IdentityStore):
    assert identities.find_by_id("user1").name == "John Doe"
    assert identities.find_by_id("USER1") is None
    assert identities.find_by_id("missing") is None


def test_get_raises_not_found(identities: IdentityStore):
    with pytest.raises(NotFound):
        identities.get("nobody")


@pytest.mark.parametrize(
    "identity_id, name",
    [("user1", "John Doe"), ("user2", "Jane Smith"), ("admin1", "Admin User")],
)
def test_authenticate_accepts_matching_pairs(identities: IdentityStore, identity_id, name):
    identity = identities.authenticate(identity_id, name)
    assert identity.id == identity_id
    assert identity == identities.find_by_id(identity_id)


@pytest.mark.parametrize(
    "identity_id, name",
    [
        ("user1", "Wrong Name"),
        ("user1", "john doe"),
        ("user1", "Jane Smith"),
        ("ghost", "John Doe"),
        ("", ""),
    ],
)
def test_authenticate_rejects_other_pairs(identities: IdentityStore, identity_id, name):
    with pytest.raises(InvalidCredentials) as excinfo:
        identities.authenticate(identity_id, name)
    assert excinfo.value.message == "Invalid credentials. Please try again."


def test_list_all_is_snapshot_in_declaration_order(identities: IdentityStore):
    listed = identities.list_all()
    assert [i.id for i in listed] == ["user1", "user2", "admin1"]
    listed.clear()
    assert len(identities.list_all()) == 3


def test_update_balance_replaces_only_balance(identities: IdentityStore):
    before = identities.find_by_id("user1")
    updated = identities.update_balance("user1", 650)
    assert updated.balance == 650
    assert (updated.id, updated.name, updated.role) == (before.id, before.name, before.role)
    assert identities.find_by_id("user1").balance == 650
    # the old instance is untouched
    assert before.balance == 500
    assert identities.find_by_id("user2").balance == 750


def test_update_balance_allows_negative(identities: IdentityStore):
    assert identities.update_balance("user2", -25.5).balance == -25.5


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf, "650", None, True])
def test_update_balance_rejects_non_finite_before_mutation(identities: IdentityStore, bad):
    with pytest.raises(ValidationFailed):
        identities.update_balance("user1", bad)
    assert identities.find_by_id("user1").balance == 500


def test_update_balance_unknown_identity(identities: IdentityStore):
    with pytest.raises(NotFound):
        identities.update_balance("ghost", 10)


def test_duplicate_identity_ids_are_rejected():
    with pytest.raises(ValueError):
        IdentityStore([Identity(id="a", name="A"), Identity(id="a", name="B")])


def test_balance_display_uses_two_decimals():
    assert Identity(id="x", name="X", balance=650).balance_display == "$650.00"
    assert Identity(id="x", name="X", balance=0.5).balance_display == "$0.50"


@pytest.mark.parametrize(
    "raw, expected",
    [("650", 650.0), (" 12.25 ", 12.25), ("-3", -3.0), (".5", 0.5), ("1e3", 1000.0), (7, 7.0), (1.5, 1.5)],
)
def test_parse_balance_accepts_numbers(raw, expected):
    assert parse_balance(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["", "   ", "abc", "12abc", "nan", "inf", "1_000", "0x10", "1e999", 10**400, None, True, False, [1], {"v": 1}],
)
def test_parse_balance_rejects_non_numeric(raw):
    with pytest.raises(ValidationFailed):
        parse_balance(raw)
