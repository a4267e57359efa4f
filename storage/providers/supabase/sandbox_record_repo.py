"""Supabase repository for sandbox_records persistence."""

from __future__ import annotations

from typing import Any

from sandbox.lifecycle import parse_sandbox_status
from storage.models import SandboxRecord, check_update_fields, decode_timestamp, encode_timestamp
from storage.providers.supabase import _query

_REPO = "sandbox record repo"


class SupabaseSandboxRecordRepo:
    """Sandbox record repository backed by a Supabase client."""

    _TABLE = "sandbox_records"

    def __init__(self, client: Any) -> None:
        if client is None:
            raise RuntimeError(
                "Supabase sandbox record repo requires a client. "
                "Pass supabase_client=... into build_sandbox_record_repo(strategy='supabase')."
            )
        if not hasattr(client, "table"):
            raise RuntimeError(
                "Supabase sandbox record repo requires a client with table(name). "
                "Use supabase-py client or a compatible adapter."
            )
        self._client = client

    def close(self) -> None:
        """Compatibility no-op with SQLiteSandboxRecordRepo."""
        return None

    def get(self, sandbox_id: str) -> SandboxRecord | None:
        query = self._table().select("*").eq("id", sandbox_id)
        query = _query.limit(query, 1, _REPO, "get")
        rows = _query.rows(query.execute(), _REPO, "get")
        if not rows:
            return None
        return self._row_to_record(rows[0])

    def insert(self, record: SandboxRecord) -> None:
        self._table().insert(
            {
                "id": record.id,
                "user_id": record.user_id,
                "status": str(record.status),
                "worker_url": record.worker_url,
                "last_active_at": encode_timestamp(record.last_active_at),
                "workspace_synced_at": encode_timestamp(record.workspace_synced_at),
                "metadata": record.metadata,
                "created_at": encode_timestamp(record.created_at),
                "updated_at": encode_timestamp(record.updated_at),
            }
        ).execute()

    def update(self, sandbox_id: str, **fields: Any) -> int:
        check_update_fields(fields)
        if not fields:
            return 0
        payload: dict[str, Any] = {}
        for name, value in fields.items():
            if name == "metadata":
                payload[name] = value
            elif name == "status":
                payload[name] = str(value)
            else:
                payload[name] = encode_timestamp(value)
        response = self._table().update(payload).eq("id", sandbox_id).execute()
        return len(_query.rows(response, _REPO, "update"))

    def delete(self, sandbox_id: str) -> int:
        response = self._table().delete().eq("id", sandbox_id).execute()
        return len(_query.rows(response, _REPO, "delete"))

    def count(self) -> int:
        response = self._table().select("id").execute()
        return len(_query.rows(response, _REPO, "count"))

    def _table(self) -> Any:
        return self._client.table(self._TABLE)

    @staticmethod
    def _row_to_record(row: dict[str, Any]) -> SandboxRecord:
        user_id = row.get("user_id")
        if user_id is None:
            raise RuntimeError(
                "Supabase sandbox record repo expected non-null user_id. "
                "Check table schema and existing rows."
            )
        metadata = row.get("metadata")
        return SandboxRecord(
            id=str(row["id"]),
            user_id=str(user_id),
            status=parse_sandbox_status(row.get("status")),
            worker_url=str(row.get("worker_url") or ""),
            last_active_at=decode_timestamp(row.get("last_active_at")),
            workspace_synced_at=decode_timestamp(row.get("workspace_synced_at")),
            metadata=dict(metadata) if isinstance(metadata, dict) else None,
            created_at=decode_timestamp(row.get("created_at")),
            updated_at=decode_timestamp(row.get("updated_at")),
        )
