"""FastAPI router for login, refresh, and revoke endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Header, Response

from chirpy.application.dto.user_models import (
    LoginResponse,
    RefreshResponse,
    UserCredentialsRequest,
)
from chirpy.application.services.session_manager import SessionManager
from chirpy.domain.auth.errors import AuthError
from chirpy.infrastructure.http.auth_guard import extract_bearer_token
from chirpy.infrastructure.http.errors import auth_http_exception


def build_auth_router(*, session_manager: SessionManager) -> APIRouter:
    """Build router exposing session lifecycle endpoints."""

    router = APIRouter(prefix="/api", tags=["auth"])

    @router.post("/login", response_model=LoginResponse)
    async def login(payload: UserCredentialsRequest) -> LoginResponse:
        try:
            result = await session_manager.login(email=payload.email, password=payload.password)
            result.raise_for_outcome()
        except AuthError as exc:
            raise auth_http_exception(exc) from exc

        assert result.session is not None
        return LoginResponse.from_session(result.session)

    @router.post("/refresh", response_model=RefreshResponse)
    async def refresh(
        authorization: Annotated[str | None, Header()] = None,
    ) -> RefreshResponse:
        try:
            refresh_token = extract_bearer_token(authorization)
            result = await session_manager.refresh(refresh_token=refresh_token)
            result.raise_for_outcome()
        except AuthError as exc:
            raise auth_http_exception(exc) from exc

        assert result.access_token is not None
        return RefreshResponse(token=result.access_token)

    @router.post("/revoke", status_code=204, response_class=Response)
    async def revoke(
        authorization: Annotated[str | None, Header()] = None,
    ) -> Response:
        try:
            refresh_token = extract_bearer_token(authorization)
            await session_manager.revoke(refresh_token=refresh_token)
        except AuthError as exc:
            raise auth_http_exception(exc) from exc

        return Response(status_code=204)

    return router
