"""Shared storage domain models: provider-neutral data types."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sandbox.lifecycle import SandboxStatus

# Columns a webhook may change after insert. user_id and worker_url are insert-only.
UPDATABLE_SANDBOX_FIELDS = frozenset(
    {
        "status",
        "last_active_at",
        "workspace_synced_at",
        "metadata",
        "updated_at",
    }
)


@dataclass
class SandboxRecord:
    id: str
    user_id: str
    status: SandboxStatus
    worker_url: str = ""
    last_active_at: datetime | None = None
    workspace_synced_at: datetime | None = None
    metadata: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


def encode_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def decode_timestamp(value: Any) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def check_update_fields(fields: dict[str, Any]) -> None:
    unknown = set(fields) - UPDATABLE_SANDBOX_FIELDS
    if unknown:
        raise ValueError(f"Sandbox record fields are not updatable: {', '.join(sorted(unknown))}")
