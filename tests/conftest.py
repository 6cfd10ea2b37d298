"""Pytest configuration and shared fixtures."""

import pytest

from src.core.config import settings


@pytest.fixture(autouse=True)
def isolated_device_storage(tmp_path, monkeypatch):
    """Keep any default device identity out of the real home directory."""
    monkeypatch.setattr(settings, "device_storage_path", str(tmp_path / "device.json"))
