"""
Pytest configuration for the Record Keeper API.

Provides fixtures for:
- Stores built directly (no application) with a controllable clock
- A session backed by a temporary slot database
- A FastAPI test client per test, signed in or anonymous
"""

from __future__ import annotations

import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Generator

# ``record_keeper_api.app`` builds an application at import time; keep its
# session slot out of the project root.
os.environ.setdefault(
    "SESSION_DB_PATH",
    str(Path(tempfile.mkdtemp(prefix="record-keeper-tests-")) / "import-session.db"),
)

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from record_keeper_api.app.core.config import Settings
from record_keeper_api.app.main import create_app
from record_keeper_api.app.services.identity_service import SEED_IDENTITIES, IdentityStore
from record_keeper_api.app.services.notification_service import NotificationService
from record_keeper_api.app.services.record_service import RecordStore
from record_keeper_api.app.services.session_service import Session
from record_keeper_api.app.services.slot_service import SlotService


class FakeClock:
    """Deterministic clock; each call advances by ``step``."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def identities() -> IdentityStore:
    return IdentityStore(SEED_IDENTITIES)


@pytest.fixture
def records(identities: IdentityStore, clock: FakeClock) -> RecordStore:
    return RecordStore(identities, clock=clock)


@pytest.fixture
def slot_db(tmp_path: Path) -> str:
    return str(tmp_path / "session.db")


@pytest.fixture
def slots(slot_db: str) -> SlotService:
    return SlotService(slot_db)


@pytest.fixture
def session(identities: IdentityStore, slots: SlotService) -> Session:
    return Session(identities, slots)


@pytest.fixture
def notifier() -> NotificationService:
    return NotificationService(history=10)


@pytest.fixture
def app_settings(slot_db: str) -> Settings:
    return Settings(session_db_path=slot_db, seed_demo_data=True, log_level="DEBUG")


@pytest.fixture
def app(app_settings: Settings) -> FastAPI:
    return create_app(app_settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


def _login(client: TestClient, identity_id: str, name: str):
    return client.post("/api/v1/session/login", json={"id": identity_id, "name": name})


@pytest.fixture
def login(client: TestClient):
    """Sign the test client in as the given identity."""
    return lambda identity_id, name: _login(client, identity_id, name)


@pytest.fixture
def user_client(client: TestClient) -> TestClient:
    response = _login(client, "user1", "John Doe")
    assert response.status_code == 200
    return client


@pytest.fixture
def admin_client(client: TestClient) -> TestClient:
    response = _login(client, "admin1", "Admin User")
    assert response.status_code == 200
    return client
