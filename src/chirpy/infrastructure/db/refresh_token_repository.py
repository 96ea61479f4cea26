"""SQLAlchemy adapter for refresh token persistence."""

from __future__ import annotations

import logging
from typing import cast

import sqlalchemy as sa
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from chirpy.application.ports.refresh_token_repository_port import (
    RefreshTokenCreateInput,
    RefreshTokenRecord,
    RefreshTokenRepositoryPort,
)
from chirpy.domain.auth.errors import StorageError
from chirpy.infrastructure.db._rows import as_optional_utc, as_utc, as_uuid
from chirpy.infrastructure.db.metadata import refresh_tokens

logger = logging.getLogger(__name__)


class SqlAlchemyRefreshTokenRepository(RefreshTokenRepositoryPort):
    """Refresh token repository backed by SQLAlchemy async sessions.

    Each operation runs exactly one statement in its own transaction, and any
    driver failure is re-raised as ``StorageError`` without retrying.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create_token(self, payload: RefreshTokenCreateInput) -> RefreshTokenRecord:
        """Insert one refresh token row and return the persisted record."""

        statement = (
            sa.insert(refresh_tokens)
            .values(
                token=payload.token,
                user_id=payload.user_id,
                expires_at=payload.expires_at,
            )
            .returning(*refresh_tokens.c)
        )

        try:
            async with self._session_factory() as session:
                result = await session.execute(statement)
                row = result.mappings().one()
                await session.commit()
        except SQLAlchemyError as error:
            logger.error("refresh_token_create_failed user_id=%s", payload.user_id)
            raise StorageError("refresh token create failed") from error

        return _to_refresh_token_record(row)

    async def get_by_token(self, *, token: str) -> RefreshTokenRecord | None:
        """Return one refresh token snapshot by exact token match."""

        statement = sa.select(*refresh_tokens.c).where(refresh_tokens.c.token == token).limit(1)

        try:
            async with self._session_factory() as session:
                result = await session.execute(statement)
                row = result.mappings().first()
        except SQLAlchemyError as error:
            logger.error("refresh_token_lookup_failed")
            raise StorageError("refresh token lookup failed") from error

        if row is None:
            return None
        return _to_refresh_token_record(row)

    async def revoke_token(self, *, token: str) -> None:
        """Stamp ``revoked_at`` once; repeated or unknown revocations change nothing."""

        statement = (
            sa.update(refresh_tokens)
            .where(
                refresh_tokens.c.token == token,
                refresh_tokens.c.revoked_at.is_(None),
            )
            .values(revoked_at=sa.text("CURRENT_TIMESTAMP"))
        )

        try:
            async with self._session_factory() as session:
                await session.execute(statement)
                await session.commit()
        except SQLAlchemyError as error:
            logger.error("refresh_token_revoke_failed")
            raise StorageError("refresh token revoke failed") from error


def _to_refresh_token_record(row: sa.RowMapping) -> RefreshTokenRecord:
    return RefreshTokenRecord(
        token=cast(str, row["token"]),
        user_id=as_uuid(row["user_id"]),
        issued_at=as_utc(row["issued_at"]),
        expires_at=as_utc(row["expires_at"]),
        revoked_at=as_optional_utc(row["revoked_at"]),
    )
