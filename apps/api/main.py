"""Chirpy API entrypoint and HTTP route wiring."""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from chirpy.application.ports.access_token_codec_port import AccessTokenCodecPort
from chirpy.application.ports.password_hasher_port import PasswordHasherPort
from chirpy.application.ports.refresh_token_issuer_port import RefreshTokenIssuerPort
from chirpy.application.services.chirp_service import ChirpService
from chirpy.application.services.polka_webhook_service import PolkaWebhookService
from chirpy.application.services.session_manager import SessionManager
from chirpy.application.services.user_service import UserService
from chirpy.config.auth_config import AuthConfig
from chirpy.config.settings import load_settings
from chirpy.infrastructure.db.chirp_repository import SqlAlchemyChirpRepository
from chirpy.infrastructure.db.data_reset_repository import SqlAlchemyDataResetRepository
from chirpy.infrastructure.db.refresh_token_repository import SqlAlchemyRefreshTokenRepository
from chirpy.infrastructure.db.session import create_session_factory
from chirpy.infrastructure.db.user_repository import SqlAlchemyUserRepository
from chirpy.infrastructure.http.admin_router import build_admin_router
from chirpy.infrastructure.http.auth_guard import AuthorizationGuard
from chirpy.infrastructure.http.auth_router import build_auth_router
from chirpy.infrastructure.http.chirps_router import build_chirps_router
from chirpy.infrastructure.http.users_router import build_users_router
from chirpy.infrastructure.http.webhook_router import build_webhook_router
from chirpy.infrastructure.logging import configure_logging
from chirpy.infrastructure.security.access_token_codec import JwtAccessTokenCodec
from chirpy.infrastructure.security.password_hasher import Argon2PasswordHasher
from chirpy.infrastructure.security.token_service import OpaqueTokenService

API_HOST = "0.0.0.0"
API_PORT = 8080


def create_app(
    *,
    auth_config: AuthConfig | None = None,
    database_url: str | None = None,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    password_hasher: PasswordHasherPort | None = None,
    access_tokens: AccessTokenCodecPort | None = None,
    token_service: RefreshTokenIssuerPort | None = None,
) -> FastAPI:
    """Create FastAPI app with every collaborator built once and injected explicitly."""

    if auth_config is None or (session_factory is None and database_url is None):
        settings = load_settings()
        configure_logging(level=settings.log_level)
        if auth_config is None:
            auth_config = AuthConfig.from_settings(settings)
        if database_url is None:
            database_url = settings.database_url

    if session_factory is None:
        assert database_url is not None
        session_factory = create_session_factory(database_url)
    if password_hasher is None:
        password_hasher = Argon2PasswordHasher()
    if access_tokens is None:
        access_tokens = JwtAccessTokenCodec()
    if token_service is None:
        token_service = OpaqueTokenService(token_ttl=auth_config.refresh_token_ttl)

    users = SqlAlchemyUserRepository(session_factory)
    auth_guard = AuthorizationGuard(config=auth_config, access_tokens=access_tokens)
    session_manager = SessionManager(
        config=auth_config,
        users=users,
        refresh_tokens=SqlAlchemyRefreshTokenRepository(session_factory),
        password_hasher=password_hasher,
        access_tokens=access_tokens,
        token_service=token_service,
    )
    user_service = UserService(users=users, password_hasher=password_hasher)

    app = FastAPI(title="Chirpy")
    app.include_router(build_auth_router(session_manager=session_manager))
    app.include_router(build_users_router(user_service=user_service, auth_guard=auth_guard))
    app.include_router(
        build_chirps_router(
            chirp_service=ChirpService(chirps=SqlAlchemyChirpRepository(session_factory)),
            auth_guard=auth_guard,
        )
    )
    app.include_router(
        build_webhook_router(
            webhook_service=PolkaWebhookService(user_service=user_service),
            auth_guard=auth_guard,
        )
    )
    app.include_router(
        build_admin_router(
            data_reset=SqlAlchemyDataResetRepository(session_factory),
            auth_guard=auth_guard,
        )
    )

    @app.get("/api/healthz", response_class=PlainTextResponse)
    async def healthz() -> PlainTextResponse:
        return PlainTextResponse("OK")

    return app


def run_asgi_server(*, host: str = API_HOST, port: int = API_PORT) -> None:
    """Run the API as a long-lived ASGI process using application factory mode."""

    uvicorn.run(
        "apps.api.main:create_app",
        host=host,
        port=port,
        factory=True,
    )


def main() -> None:
    """Run Chirpy API process."""

    run_asgi_server()


if __name__ == "__main__":
    main()
