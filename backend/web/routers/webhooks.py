"""Webhook endpoint for provider sandbox events."""

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from backend.web.models.webhooks import WebhookPayload
from backend.web.services.webhook_service import reconcile_event
from storage.contracts import SandboxRecordRepo

logger = logging.getLogger(__name__)

router = APIRouter(tags=["webhooks"])


def get_sandbox_repo(request: Request) -> SandboxRecordRepo:
    return request.app.state.sandbox_repo


@router.post("/webhook")
async def receive_webhook(
    payload: WebhookPayload,
    repo: SandboxRecordRepo = Depends(get_sandbox_repo),
) -> Any:
    """Ingest provider webhook: reconcile the mirrored sandbox record and acknowledge."""
    logger.info("Received webhook event=%s sandbox_id=%s", payload.event, payload.data.sandbox_id)
    try:
        await asyncio.to_thread(reconcile_event, repo, payload)
    except Exception:
        # @@@opaque-500 - caller sees one generic failure; detail stays in the log.
        logger.exception(
            "Webhook processing failed event=%s sandbox_id=%s",
            payload.event,
            payload.data.sandbox_id,
        )
        return JSONResponse(status_code=500, content={"error": "Webhook processing failed"})
    return {"received": True}
