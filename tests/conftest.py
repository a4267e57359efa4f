"""Shared fixtures for sandbox mirror tests."""

import pytest

from backend.web.core import config
from storage.providers.sqlite.sandbox_record_repo import SQLiteSandboxRecordRepo


@pytest.fixture
def sandbox_db_path(tmp_path, monkeypatch):
    """Point the app's SQLite store at a per-test database and force the sqlite strategy."""
    path = tmp_path / "sandbox.db"
    monkeypatch.setattr(config, "SANDBOX_DB_PATH", path)
    monkeypatch.delenv("SANDBOX_MIRROR_STORAGE_STRATEGY", raising=False)
    return path


@pytest.fixture
def sqlite_repo(tmp_path):
    repo = SQLiteSandboxRecordRepo(tmp_path / "sandbox.db")
    try:
        yield repo
    finally:
        repo.close()
