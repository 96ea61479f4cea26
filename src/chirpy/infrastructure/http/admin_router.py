"""FastAPI router for development-only administrative operations."""

from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from chirpy.application.ports.data_reset_port import DataResetPort
from chirpy.domain.auth.errors import AuthError
from chirpy.infrastructure.http.auth_guard import AuthorizationGuard
from chirpy.infrastructure.http.errors import auth_http_exception

logger = logging.getLogger(__name__)


def build_admin_router(
    *,
    data_reset: DataResetPort,
    auth_guard: AuthorizationGuard,
) -> APIRouter:
    """Build router exposing the platform-gated reset endpoint."""

    router = APIRouter(prefix="/admin", tags=["admin"])

    @router.post("/reset", response_class=PlainTextResponse)
    async def reset() -> PlainTextResponse:
        try:
            auth_guard.authorize_platform()
        except AuthError as exc:
            raise auth_http_exception(exc) from exc

        await data_reset.delete_all()
        logger.warning("admin_reset_completed")
        return PlainTextResponse("Reset OK")

    return router
