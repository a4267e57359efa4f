"""Shared sandbox DB constants."""

import os
from pathlib import Path

# @@@env-at-import - This is evaluated at import time. Export SANDBOX_MIRROR_DB_PATH before process start.
DEFAULT_DB_PATH = Path(os.getenv("SANDBOX_MIRROR_DB_PATH") or (Path.home() / ".sandbox-mirror" / "sandbox.db"))
