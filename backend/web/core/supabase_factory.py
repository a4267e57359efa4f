"""Supabase client factory for the sandbox record store.

Wire it with SANDBOX_MIRROR_SUPABASE_CLIENT_FACTORY=backend.web.core.supabase_factory:create_supabase_client.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from supabase import create_client

_URL_ENV = "SUPABASE_PUBLIC_URL"
_KEY_ENV = "SANDBOX_MIRROR_SUPABASE_SERVICE_ROLE_KEY"


def _required(env: Mapping[str, str], name: str) -> str:
    value = (env.get(name) or "").strip()
    if not value:
        raise RuntimeError(f"{name} is required for the Supabase sandbox record store.")
    return value


def create_supabase_client(env: Mapping[str, str] | None = None) -> Any:
    """Build a supabase-py client for the sandbox_records table.

    Blank values count as missing; there is no fallback to the SQLite store.
    """
    env_map = env if env is not None else os.environ
    url = _required(env_map, _URL_ENV)
    key = _required(env_map, _KEY_ENV)
    return create_client(url.rstrip("/"), key)
