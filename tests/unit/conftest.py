"""Pytest configuration and fixtures for unit tests."""

from datetime import date, datetime

import pytest

from src.domain.activity import ActivityRecord
from src.domain.rider import RiderProfile
from src.services.device_identity import ClientEnvironment, DeviceIdentity, InMemoryStorage
from tests.unit.mocks import InMemoryDBClient


@pytest.fixture
def in_memory_db():
    """Provides a fresh InMemoryDBClient for each test."""
    return InMemoryDBClient()


@pytest.fixture
def patched_db(monkeypatch, in_memory_db):
    """Patches src.core.db_client functions to use InMemoryDBClient."""
    monkeypatch.setattr("src.core.db_client.create_record", in_memory_db.create_record)
    monkeypatch.setattr("src.core.db_client.get_record", in_memory_db.get_record)
    monkeypatch.setattr("src.core.db_client.list_records", in_memory_db.list_records)
    monkeypatch.setattr("src.core.db_client.get_first_record", in_memory_db.get_first_record)

    return in_memory_db


@pytest.fixture
async def seeded_catalog(patched_db):
    """Loads a small platform and service-area catalog into the in-memory store."""
    for name, category in [("Swiggy", "Food Delivery"), ("Zepto", "Quick Commerce"), ("Zomato", "Food Delivery")]:
        await patched_db.create_record(collection="delivery_platforms", data={"name": name, "category": category})
    for name in ["North", "Central", "South"]:
        await patched_db.create_record(collection="service_areas", data={"name": name})
    return patched_db


class FakeClock:
    """Settable epoch-millisecond clock for DeviceIdentity."""

    def __init__(self, start_ms: int = 1_700_000_000_000):
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, *, days: float = 0, ms: int = 0) -> None:
        self.now_ms += int(days * 86_400_000) + ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def client_env():
    return ClientEnvironment(user_agent="Mozilla/5.0 (Linux; Android 14) Mobile Safari/537.36", screen_width=412, screen_height=915)


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def identity(storage, client_env, clock):
    """DeviceIdentity over in-memory storage with a controllable clock."""
    return DeviceIdentity(storage, client_env, clock=clock)


@pytest.fixture
def make_activity():
    """Factory for ActivityRecord instances with sensible defaults."""
    counter = iter(range(1, 10_000))

    def _make(
        activity_date: date,
        *,
        earnings: float = 500.0,
        hours_worked: float = 8.0,
        satisfaction_rating: int = 4,
        primary_platform: str = "Swiggy",
        rider_profile_id: str = "1",
    ) -> ActivityRecord:
        return ActivityRecord(
            id=str(next(counter)),
            rider_profile_id=rider_profile_id,
            activity_date=activity_date,
            earnings=earnings,
            hours_worked=hours_worked,
            primary_platform=primary_platform,
            satisfaction_rating=satisfaction_rating,
            created=datetime(2024, 1, 1, 9, 0),
        )

    return _make


@pytest.fixture
def make_profile():
    """Factory for RiderProfile instances with sensible defaults."""

    def _make(
        rider_id: str = "1",
        *,
        weekly_goal: float = 5000.0,
        created: datetime | None = None,
        name: str = "Ravi Kumar",
    ) -> RiderProfile:
        return RiderProfile(
            id=rider_id,
            name=name,
            age=27,
            phone="9876543210",
            weekly_goal=weekly_goal,
            hours_per_day=8.0,
            created=created or datetime(2024, 1, 1, 9, 0),
        )

    return _make
