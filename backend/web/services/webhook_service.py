"""Webhook reconciliation: mirror provider sandbox events into the record store.

Each WebhookEvent maps to exactly one entry in _HANDLERS. A None entry marks an
event that is acknowledged without touching the store. Import fails if any
WebhookEvent member is missing from the table.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from backend.web.models.webhooks import WebhookData, WebhookEvent, WebhookPayload
from sandbox.lifecycle import SandboxStatus
from storage.contracts import SandboxRecordRepo
from storage.models import SandboxRecord

logger = logging.getLogger(__name__)

EventHandler = Callable[[SandboxRecordRepo, WebhookData, datetime], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _handle_sandbox_created(repo: SandboxRecordRepo, data: WebhookData, now: datetime) -> None:
    if not data.user_id:
        logger.warning("sandbox.created missing userId sandbox_id=%s", data.sandbox_id)
        return

    existing = repo.get(data.sandbox_id)
    if existing is None:
        repo.insert(
            SandboxRecord(
                id=data.sandbox_id,
                user_id=data.user_id,
                status=SandboxStatus.RUNNING,
                worker_url="",
                last_active_at=now,
                created_at=now,
            )
        )
        logger.info("Created sandbox record sandbox_id=%s user_id=%s", data.sandbox_id, data.user_id)
        return

    # @@@created-replay - provider may resend created for a live sandbox; owner and worker url stay as first written.
    repo.update(
        data.sandbox_id,
        status=SandboxStatus.RUNNING,
        last_active_at=now,
        updated_at=now,
    )


def _handle_sandbox_hibernated(repo: SandboxRecordRepo, data: WebhookData, now: datetime) -> None:
    repo.update(data.sandbox_id, status=SandboxStatus.SLEEPING, updated_at=now)
    logger.info("Sandbox hibernated sandbox_id=%s", data.sandbox_id)


def _handle_sandbox_woken(repo: SandboxRecordRepo, data: WebhookData, now: datetime) -> None:
    repo.update(
        data.sandbox_id,
        status=SandboxStatus.RUNNING,
        last_active_at=now,
        updated_at=now,
    )
    logger.info("Sandbox woken sandbox_id=%s", data.sandbox_id)


def _handle_sandbox_deleted(repo: SandboxRecordRepo, data: WebhookData, now: datetime) -> None:
    repo.delete(data.sandbox_id)
    logger.info("Sandbox deleted sandbox_id=%s", data.sandbox_id)


def _handle_sandbox_error(repo: SandboxRecordRepo, data: WebhookData, now: datetime) -> None:
    if data.error:
        repo.update(
            data.sandbox_id,
            status=SandboxStatus.ERROR,
            metadata={"lastError": data.error},
            updated_at=now,
        )
    else:
        repo.update(data.sandbox_id, status=SandboxStatus.ERROR, updated_at=now)
    logger.error("Sandbox error sandbox_id=%s error=%s", data.sandbox_id, data.error)


def _handle_session_message(repo: SandboxRecordRepo, data: WebhookData, now: datetime) -> None:
    repo.update(data.sandbox_id, last_active_at=now, updated_at=now)
    logger.debug("Session message received sandbox_id=%s session_id=%s", data.sandbox_id, data.session_id)


def _handle_workspace_synced(repo: SandboxRecordRepo, data: WebhookData, now: datetime) -> None:
    repo.update(data.sandbox_id, workspace_synced_at=now, updated_at=now)
    logger.info("Workspace synced sandbox_id=%s", data.sandbox_id)


_HANDLERS: dict[WebhookEvent, EventHandler | None] = {
    WebhookEvent.SANDBOX_CREATED: _handle_sandbox_created,
    WebhookEvent.SANDBOX_STARTED: None,
    WebhookEvent.SANDBOX_STOPPED: None,
    WebhookEvent.SANDBOX_HIBERNATED: _handle_sandbox_hibernated,
    WebhookEvent.SANDBOX_WOKEN: _handle_sandbox_woken,
    WebhookEvent.SANDBOX_DELETED: _handle_sandbox_deleted,
    WebhookEvent.SANDBOX_ERROR: _handle_sandbox_error,
    WebhookEvent.SESSION_CREATED: None,
    WebhookEvent.SESSION_MESSAGE: _handle_session_message,
    WebhookEvent.WORKSPACE_SYNCED: _handle_workspace_synced,
}

_unmapped = set(WebhookEvent) - set(_HANDLERS)
if _unmapped:
    raise RuntimeError(f"Webhook events without a reconcile entry: {', '.join(sorted(_unmapped))}")


def reconcile_event(
    repo: SandboxRecordRepo,
    payload: WebhookPayload,
    *,
    now: datetime | None = None,
) -> None:
    """Apply one validated webhook event to the record keyed by its sandbox id.

    Updates against a missing record affect zero rows and are not an error.
    Store exceptions propagate to the caller.
    """
    handler = _HANDLERS[payload.event]
    if handler is None:
        logger.debug("Unhandled webhook event event=%s sandbox_id=%s", payload.event, payload.data.sandbox_id)
        return
    handler(repo, payload.data, now or _utcnow())
