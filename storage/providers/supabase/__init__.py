"""Supabase storage provider implementations."""

from .sandbox_record_repo import SupabaseSandboxRecordRepo

__all__ = [
    "SupabaseSandboxRecordRepo",
]
