"""Pydantic models for payment-provider webhook payloads."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel


class PolkaWebhookData(BaseModel):
    user_id: UUID


class PolkaWebhookPayload(BaseModel):
    """Membership event posted by the payment provider; unknown fields are ignored."""

    event: str
    data: PolkaWebhookData
