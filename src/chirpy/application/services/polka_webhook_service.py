"""Service for payment-provider membership webhooks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from chirpy.application.services.user_service import UserNotFoundError, UserService

logger = logging.getLogger(__name__)

USER_UPGRADED_EVENT = "user.upgraded"


class PolkaWebhookOutcome(StrEnum):
    """Outcomes returned by webhook handling."""

    UPGRADED = "upgraded"
    IGNORED = "ignored"
    USER_NOT_FOUND = "user_not_found"


@dataclass(frozen=True)
class PolkaWebhookResult:
    """Service outcome model for webhook API response mapping."""

    outcome: PolkaWebhookOutcome


class PolkaWebhookService:
    """Apply membership upgrades announced by the payment provider."""

    def __init__(self, *, user_service: UserService) -> None:
        self._user_service = user_service

    async def handle(self, *, event: str, user_id: UUID) -> PolkaWebhookResult:
        if event != USER_UPGRADED_EVENT:
            logger.info("polka_webhook_ignored event=%s", event)
            return PolkaWebhookResult(outcome=PolkaWebhookOutcome.IGNORED)

        try:
            await self._user_service.upgrade_to_chirpy_red(user_id=user_id)
        except UserNotFoundError:
            logger.info("polka_webhook_user_not_found user_id=%s", user_id)
            return PolkaWebhookResult(outcome=PolkaWebhookOutcome.USER_NOT_FOUND)

        logger.info("polka_webhook_user_upgraded user_id=%s", user_id)
        return PolkaWebhookResult(outcome=PolkaWebhookOutcome.UPGRADED)
