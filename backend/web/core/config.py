"""Configuration constants for the sandbox mirror web backend."""

import os

from sandbox.db import DEFAULT_DB_PATH

# Database paths
SANDBOX_DB_PATH = DEFAULT_DB_PATH

# Server
DEFAULT_PORT = 8001
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
