import sqlite3
from datetime import datetime, timezone

import pytest

from sandbox.lifecycle import SandboxStatus
from storage.models import SandboxRecord
from storage.providers.sqlite.sandbox_record_repo import SQLiteSandboxRecordRepo
from storage.providers.supabase.sandbox_record_repo import SupabaseSandboxRecordRepo
from tests.fakes.supabase import FakeSupabaseClient

T0 = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
T1 = datetime(2026, 1, 1, 13, 30, tzinfo=timezone.utc)


def _record(sandbox_id: str = "sbx-1") -> SandboxRecord:
    return SandboxRecord(
        id=sandbox_id,
        user_id="user-1",
        status=SandboxStatus.RUNNING,
        last_active_at=T0,
        created_at=T0,
    )


@pytest.fixture(params=["sqlite", "supabase"])
def repo(request, tmp_path):
    if request.param == "sqlite":
        r = SQLiteSandboxRecordRepo(tmp_path / "nested" / "sandbox.db")
    else:
        r = SupabaseSandboxRecordRepo(FakeSupabaseClient())
    try:
        yield r
    finally:
        r.close()


def test_insert_and_get_roundtrip(repo):
    repo.insert(_record())

    loaded = repo.get("sbx-1")
    assert loaded is not None
    assert loaded.user_id == "user-1"
    assert loaded.status is SandboxStatus.RUNNING
    assert loaded.worker_url == ""
    assert loaded.last_active_at == T0
    assert loaded.workspace_synced_at is None
    assert loaded.metadata is None
    assert loaded.updated_at is None


def test_get_missing_returns_none(repo):
    assert repo.get("nope") is None


def test_update_reports_rows_affected(repo):
    repo.insert(_record())

    assert repo.update("sbx-1", status=SandboxStatus.ERROR, metadata={"lastError": "boom"}, updated_at=T1) == 1
    assert repo.update("missing", status=SandboxStatus.ERROR) == 0

    loaded = repo.get("sbx-1")
    assert loaded is not None
    assert loaded.status is SandboxStatus.ERROR
    assert loaded.metadata == {"lastError": "boom"}
    assert loaded.updated_at == T1


def test_update_rejects_insert_only_fields(repo):
    repo.insert(_record())

    with pytest.raises(ValueError, match="user_id"):
        repo.update("sbx-1", user_id="someone-else")
    with pytest.raises(ValueError, match="worker_url"):
        repo.update("sbx-1", worker_url="https://elsewhere")

    loaded = repo.get("sbx-1")
    assert loaded is not None
    assert loaded.user_id == "user-1"


def test_count_tracks_inserts_and_deletes(repo):
    assert repo.count() == 0
    repo.insert(_record("sbx-1"))
    repo.insert(_record("sbx-2"))
    assert repo.count() == 2

    repo.delete("sbx-1")
    assert repo.count() == 1


def test_delete_is_idempotent(repo):
    repo.insert(_record())

    assert repo.delete("sbx-1") == 1
    assert repo.delete("sbx-1") == 0
    assert repo.get("sbx-1") is None


def test_sqlite_creates_table_and_parent_dir(tmp_path):
    db_path = tmp_path / "a" / "b" / "sandbox.db"
    SQLiteSandboxRecordRepo(db_path)

    with sqlite3.connect(str(db_path)) as conn:
        tables = {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    assert "sandbox_records" in tables


def test_sqlite_duplicate_insert_raises(tmp_path):
    repo = SQLiteSandboxRecordRepo(tmp_path / "sandbox.db")
    repo.insert(_record())

    with pytest.raises(sqlite3.IntegrityError):
        repo.insert(_record())
    assert repo.count() == 1


def test_sqlite_invalid_status_fails_loud(tmp_path):
    db_path = tmp_path / "sandbox.db"
    repo = SQLiteSandboxRecordRepo(db_path)
    with sqlite3.connect(str(db_path)) as conn:
        conn.execute(
            "INSERT INTO sandbox_records (id, user_id, status) VALUES (?, ?, ?)",
            ("sbx-bad", "user-1", "exploded"),
        )
        conn.commit()

    with pytest.raises(RuntimeError, match="Invalid sandbox status"):
        repo.get("sbx-bad")


def test_supabase_repo_writes_snake_case_row():
    tables: dict[str, list[dict]] = {}
    repo = SupabaseSandboxRecordRepo(FakeSupabaseClient(tables))
    repo.insert(_record())
    repo.update("sbx-1", workspace_synced_at=T1, updated_at=T1)

    row = tables["sandbox_records"][0]
    assert row["id"] == "sbx-1"
    assert row["status"] == "running"
    assert row["worker_url"] == ""
    assert row["workspace_synced_at"] == T1.isoformat()
    assert row["metadata"] is None


def test_supabase_repo_requires_table_client():
    with pytest.raises(RuntimeError, match="requires a client"):
        SupabaseSandboxRecordRepo(None)
    with pytest.raises(RuntimeError, match="table\\(name\\)"):
        SupabaseSandboxRecordRepo(object())


def test_supabase_repo_rejects_malformed_response():
    class _NoDataQuery:
        def __getattr__(self, _name):
            return lambda *args, **kwargs: self

        def execute(self):
            return {"rows": []}

    class _Client:
        def table(self, _name):
            return _NoDataQuery()

    repo = SupabaseSandboxRecordRepo(_Client())
    with pytest.raises(RuntimeError, match="expected `.data` payload for get"):
        repo.get("sbx-1")
