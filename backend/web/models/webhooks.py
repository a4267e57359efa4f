"""Pydantic models for inbound provider webhooks."""

from enum import StrEnum

from pydantic import BaseModel, Field


class WebhookEvent(StrEnum):
    SANDBOX_CREATED = "sandbox.created"
    SANDBOX_STARTED = "sandbox.started"
    SANDBOX_STOPPED = "sandbox.stopped"
    SANDBOX_HIBERNATED = "sandbox.hibernated"
    SANDBOX_WOKEN = "sandbox.woken"
    SANDBOX_DELETED = "sandbox.deleted"
    SANDBOX_ERROR = "sandbox.error"
    SESSION_CREATED = "session.created"
    SESSION_MESSAGE = "session.message"
    WORKSPACE_SYNCED = "workspace.synced"


class WebhookData(BaseModel):
    sandbox_id: str = Field(alias="sandboxId")
    user_id: str | None = Field(default=None, alias="userId")
    provider: str | None = None
    session_id: str | None = Field(default=None, alias="sessionId")
    error: str | None = None


class WebhookPayload(BaseModel):
    event: WebhookEvent
    data: WebhookData
    timestamp: str
