"""FastAPI router for chirp posting, listing, and deletion."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Header, HTTPException, Response

from chirpy.application.dto.chirp_models import ChirpCreateRequest, ChirpResponse
from chirpy.application.services.chirp_service import (
    ChirpNotFoundError,
    ChirpService,
    ChirpSortOrder,
)
from chirpy.domain.auth.errors import AuthError
from chirpy.domain.chirps.moderation import ChirpTooLongError
from chirpy.infrastructure.http.auth_guard import AuthorizationGuard
from chirpy.infrastructure.http.errors import auth_http_exception


def build_chirps_router(
    *,
    chirp_service: ChirpService,
    auth_guard: AuthorizationGuard,
) -> APIRouter:
    """Build router exposing chirp endpoints."""

    router = APIRouter(prefix="/api", tags=["chirps"])

    @router.post("/chirps", response_model=ChirpResponse, status_code=201)
    async def create_chirp(
        payload: ChirpCreateRequest,
        authorization: Annotated[str | None, Header()] = None,
    ) -> ChirpResponse:
        try:
            principal = auth_guard.authenticate(authorization_header=authorization)
        except AuthError as exc:
            raise auth_http_exception(exc) from exc

        try:
            chirp = await chirp_service.create_chirp(author_id=principal.user_id, body=payload.body)
        except ChirpTooLongError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        return ChirpResponse.from_record(chirp)

    @router.get("/chirps", response_model=list[ChirpResponse])
    async def list_chirps(
        author_id: UUID | None = None,
        sort: ChirpSortOrder = ChirpSortOrder.DESC,
    ) -> list[ChirpResponse]:
        chirps = await chirp_service.list_chirps(author_id=author_id, sort=sort)
        return [ChirpResponse.from_record(chirp) for chirp in chirps]

    @router.get("/chirps/{chirp_id}", response_model=ChirpResponse)
    async def get_chirp(chirp_id: UUID) -> ChirpResponse:
        try:
            chirp = await chirp_service.get_chirp(chirp_id=chirp_id)
        except ChirpNotFoundError as exc:
            raise HTTPException(status_code=404, detail="chirp not found") from exc

        return ChirpResponse.from_record(chirp)

    @router.delete("/chirps/{chirp_id}", status_code=204, response_class=Response)
    async def delete_chirp(
        chirp_id: UUID,
        authorization: Annotated[str | None, Header()] = None,
    ) -> Response:
        try:
            principal = auth_guard.authenticate(authorization_header=authorization)
            await chirp_service.delete_chirp(actor_user_id=principal.user_id, chirp_id=chirp_id)
        except AuthError as exc:
            raise auth_http_exception(exc) from exc
        except ChirpNotFoundError as exc:
            raise HTTPException(status_code=404, detail="chirp not found") from exc

        return Response(status_code=204)

    return router
