"""Repository contracts shared by every storage provider."""

from __future__ import annotations

from typing import Any, Protocol

from storage.models import SandboxRecord


class SandboxRecordRepo(Protocol):
    """Point operations on the sandbox_records table, keyed by provider sandbox id."""

    def close(self) -> None: ...

    def get(self, sandbox_id: str) -> SandboxRecord | None: ...

    def insert(self, record: SandboxRecord) -> None: ...

    def update(self, sandbox_id: str, **fields: Any) -> int: ...

    def delete(self, sandbox_id: str) -> int: ...

    def count(self) -> int: ...
