"""Application lifespan management."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.web.core import config
from storage.runtime import build_sandbox_record_repo

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan context manager for startup and shutdown."""
    # Fail loud on bad storage config before accepting webhooks
    repo = build_sandbox_record_repo(sqlite_db_path=config.SANDBOX_DB_PATH)
    app.state.sandbox_repo = repo
    logger.info("Sandbox record store ready repo=%s", type(repo).__name__)
    try:
        yield
    finally:
        repo.close()
