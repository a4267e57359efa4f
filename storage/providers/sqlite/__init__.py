"""SQLite storage provider implementations."""

from .sandbox_record_repo import SQLiteSandboxRecordRepo

__all__ = [
    "SQLiteSandboxRecordRepo",
]
