"""Lifecycle state contract for mirrored sandbox records.

Fail-loud policy:
- Invalid state strings raise immediately.
"""

from __future__ import annotations

from enum import StrEnum


class SandboxStatus(StrEnum):
    RUNNING = "running"
    SLEEPING = "sleeping"
    ERROR = "error"


def parse_sandbox_status(value: str | None) -> SandboxStatus:
    if value is None:
        raise RuntimeError("Sandbox status is required")
    try:
        return SandboxStatus(value.lower())
    except ValueError as e:
        raise RuntimeError(f"Invalid sandbox status: {value}") from e
