"""Sandbox Mirror Web Backend - FastAPI Application."""

import os

import uvicorn
from fastapi import FastAPI

from backend.web.core.config import DEFAULT_PORT
from backend.web.core.lifespan import lifespan
from backend.web.core.logging_config import configure_logging
from backend.web.routers import webhooks

configure_logging()

# Create FastAPI app
app = FastAPI(title="Sandbox Mirror", lifespan=lifespan)

# Include routers
app.include_router(webhooks.router)


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


def _resolve_port() -> int:
    """Resolve backend port: SANDBOX_MIRROR_PORT > PORT > default 8001."""
    port = os.environ.get("SANDBOX_MIRROR_PORT") or os.environ.get("PORT")
    if port:
        return int(port)
    return DEFAULT_PORT


if __name__ == "__main__":
    # @@@module-launch-target - Package-qualified target keeps module launch (`python -m backend.web.main`) import-safe.
    uvicorn.run("backend.web.main:app", host="0.0.0.0", port=_resolve_port())
