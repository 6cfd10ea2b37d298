"""Pytest configuration and fixtures for integration tests.

These run the real aiosqlite client against a throwaway database file.
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from src.core import db_client
from src.core.config import settings
from src.main import app


@pytest.fixture
def sqlite_db_path(tmp_path, monkeypatch) -> str:
    """Points the store at a fresh SQLite file for this test."""
    path = str(tmp_path / "ridertrack_test.db")
    monkeypatch.setattr(settings, "sqlite_db_path", path)
    monkeypatch.setattr(settings, "logfire_token", None)
    return path


@pytest.fixture
def client(sqlite_db_path) -> Generator[TestClient]:
    """TestClient with the app lifespan (schema init and connection close) running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
async def initialized_db(sqlite_db_path):
    """Schema and catalog created in the current event loop; connection closed afterwards."""
    await db_client.init_db()
    yield sqlite_db_path
    await db_client.close_connection()


@pytest.fixture
def rider_payload() -> dict:
    return {
        "name": "Ravi Kumar",
        "age": 27,
        "phone": "9876543210",
        "weekly_goal": 5000,
        "hours_per_day": 8,
        "areas": ["North", "Central"],
        "platforms": ["Swiggy", "Zomato"],
    }
