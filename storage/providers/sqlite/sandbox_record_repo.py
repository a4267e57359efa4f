"""SQLite repository for sandbox_records persistence."""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import Any

from sandbox.db import DEFAULT_DB_PATH
from sandbox.lifecycle import parse_sandbox_status
from storage.models import SandboxRecord, check_update_fields, decode_timestamp, encode_timestamp


def _connect(db_path: Path) -> sqlite3.Connection:
    conn = sqlite3.connect(str(db_path), timeout=30)
    conn.execute("PRAGMA busy_timeout=30000")
    return conn


class SQLiteSandboxRecordRepo:
    """Repository boundary for sandbox_records table."""

    def __init__(self, db_path: Path | str | None = None) -> None:
        self.db_path = Path(db_path) if db_path is not None else DEFAULT_DB_PATH
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_table()

    def _ensure_table(self) -> None:
        with _connect(self.db_path) as conn:
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS sandbox_records (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    status TEXT NOT NULL,
                    worker_url TEXT NOT NULL DEFAULT '',
                    last_active_at TIMESTAMP,
                    workspace_synced_at TIMESTAMP,
                    metadata_json TEXT,
                    created_at TIMESTAMP,
                    updated_at TIMESTAMP
                )
                """
            )
            conn.commit()

    def close(self) -> None:
        """Compatibility no-op for protocol parity."""
        return None

    def get(self, sandbox_id: str) -> SandboxRecord | None:
        with _connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            row = conn.execute(
                "SELECT * FROM sandbox_records WHERE id = ? LIMIT 1",
                (sandbox_id,),
            ).fetchone()
        if row is None:
            return None
        return self._row_to_record(row)

    def insert(self, record: SandboxRecord) -> None:
        with _connect(self.db_path) as conn:
            conn.execute(
                """
                INSERT INTO sandbox_records
                (id, user_id, status, worker_url, last_active_at, workspace_synced_at,
                 metadata_json, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record.id,
                    record.user_id,
                    str(record.status),
                    record.worker_url,
                    encode_timestamp(record.last_active_at),
                    encode_timestamp(record.workspace_synced_at),
                    json.dumps(record.metadata) if record.metadata is not None else None,
                    encode_timestamp(record.created_at),
                    encode_timestamp(record.updated_at),
                ),
            )
            conn.commit()

    def update(self, sandbox_id: str, **fields: Any) -> int:
        check_update_fields(fields)
        if not fields:
            return 0
        columns: list[str] = []
        values: list[Any] = []
        for name, value in fields.items():
            if name == "metadata":
                columns.append("metadata_json = ?")
                values.append(json.dumps(value) if value is not None else None)
            elif name == "status":
                columns.append("status = ?")
                values.append(str(value))
            else:
                columns.append(f"{name} = ?")
                values.append(encode_timestamp(value))
        with _connect(self.db_path) as conn:
            cursor = conn.execute(
                f"UPDATE sandbox_records SET {', '.join(columns)} WHERE id = ?",
                (*values, sandbox_id),
            )
            conn.commit()
            return cursor.rowcount

    def delete(self, sandbox_id: str) -> int:
        with _connect(self.db_path) as conn:
            cursor = conn.execute("DELETE FROM sandbox_records WHERE id = ?", (sandbox_id,))
            conn.commit()
            return cursor.rowcount

    def count(self) -> int:
        with _connect(self.db_path) as conn:
            row = conn.execute("SELECT COUNT(*) FROM sandbox_records").fetchone()
        return int(row[0])

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> SandboxRecord:
        raw_metadata = row["metadata_json"]
        return SandboxRecord(
            id=row["id"],
            user_id=row["user_id"],
            status=parse_sandbox_status(row["status"]),
            worker_url=row["worker_url"] or "",
            last_active_at=decode_timestamp(row["last_active_at"]),
            workspace_synced_at=decode_timestamp(row["workspace_synced_at"]),
            metadata=json.loads(raw_metadata) if raw_metadata else None,
            created_at=decode_timestamp(row["created_at"]),
            updated_at=decode_timestamp(row["updated_at"]),
        )
