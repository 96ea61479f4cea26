"""FastAPI router for account registration and credential updates."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Header, HTTPException

from chirpy.application.dto.user_models import UserCredentialsRequest, UserResponse
from chirpy.application.ports.user_repository_port import EmailAlreadyRegisteredError
from chirpy.application.services.user_service import (
    InvalidUserInputError,
    UserNotFoundError,
    UserService,
)
from chirpy.domain.auth.errors import AuthError
from chirpy.infrastructure.http.auth_guard import AuthorizationGuard
from chirpy.infrastructure.http.errors import auth_http_exception


def build_users_router(
    *,
    user_service: UserService,
    auth_guard: AuthorizationGuard,
) -> APIRouter:
    """Build router exposing user account endpoints."""

    router = APIRouter(prefix="/api", tags=["users"])

    @router.post("/users", response_model=UserResponse, status_code=201)
    async def create_user(payload: UserCredentialsRequest) -> UserResponse:
        try:
            user = await user_service.register_user(email=payload.email, password=payload.password)
        except InvalidUserInputError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except EmailAlreadyRegisteredError as exc:
            raise HTTPException(status_code=409, detail="email already registered") from exc

        return UserResponse.from_record(user)

    @router.put("/users", response_model=UserResponse)
    async def update_user(
        payload: UserCredentialsRequest,
        authorization: Annotated[str | None, Header()] = None,
    ) -> UserResponse:
        try:
            principal = auth_guard.authenticate(authorization_header=authorization)
        except AuthError as exc:
            raise auth_http_exception(exc) from exc

        try:
            user = await user_service.update_credentials(
                user_id=principal.user_id,
                email=payload.email,
                password=payload.password,
            )
        except InvalidUserInputError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except EmailAlreadyRegisteredError as exc:
            raise HTTPException(status_code=409, detail="email already registered") from exc
        except UserNotFoundError as exc:
            raise HTTPException(status_code=404, detail="user not found") from exc

        return UserResponse.from_record(user)

    return router
