"""Sandbox: domain layer for provider sandboxes mirrored into the local store.

Usage:
    from sandbox import SandboxStatus, parse_sandbox_status

    status = parse_sandbox_status(row["status"])
"""

from sandbox.db import DEFAULT_DB_PATH
from sandbox.lifecycle import SandboxStatus, parse_sandbox_status

__all__ = [
    "DEFAULT_DB_PATH",
    "SandboxStatus",
    "parse_sandbox_status",
]
