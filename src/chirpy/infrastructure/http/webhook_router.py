"""FastAPI router for API-key authenticated payment-provider webhooks."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response
from pydantic import ValidationError

from chirpy.application.dto.webhook_models import PolkaWebhookPayload
from chirpy.application.services.polka_webhook_service import (
    PolkaWebhookOutcome,
    PolkaWebhookService,
)
from chirpy.domain.auth.errors import AuthError
from chirpy.infrastructure.http.auth_guard import API_KEY_SCHEME, AuthorizationGuard
from chirpy.infrastructure.http.errors import auth_http_exception


def build_webhook_router(
    *,
    webhook_service: PolkaWebhookService,
    auth_guard: AuthorizationGuard,
) -> APIRouter:
    """Build router exposing the membership webhook endpoint."""

    router = APIRouter(prefix="/api", tags=["webhooks"])

    @router.post("/polka/webhooks", status_code=204, response_class=Response)
    async def polka_webhook(request: Request) -> Response:
        try:
            auth_guard.authorize_api_key(authorization_header=request.headers.get("authorization"))
        except AuthError as exc:
            raise auth_http_exception(exc, scheme=API_KEY_SCHEME) from exc

        raw_body = await request.body()
        try:
            payload = PolkaWebhookPayload.model_validate_json(raw_body)
        except ValidationError as error:
            raise HTTPException(status_code=400, detail="invalid webhook payload") from error

        result = await webhook_service.handle(event=payload.event, user_id=payload.data.user_id)
        if result.outcome is PolkaWebhookOutcome.USER_NOT_FOUND:
            raise HTTPException(status_code=404, detail="user not found")

        return Response(status_code=204)

    return router
