"""SQLAlchemy adapter for chirp persistence."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, cast
from uuid import UUID

import sqlalchemy as sa
from sqlalchemy.engine import CursorResult
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from chirpy.application.ports.chirp_repository_port import (
    ChirpCreateInput,
    ChirpRecord,
    ChirpRepositoryPort,
)
from chirpy.infrastructure.db._rows import as_utc, as_uuid
from chirpy.infrastructure.db.metadata import chirps


class SqlAlchemyChirpRepository(ChirpRepositoryPort):
    """Chirp repository backed by SQLAlchemy async sessions.

    Creation timestamps come from the injected clock; SQLite's `CURRENT_TIMESTAMP`
    resolves whole seconds only.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._now = now or (lambda: datetime.now(tz=UTC))

    async def create_chirp(self, payload: ChirpCreateInput) -> ChirpRecord:
        created_at = self._now()
        statement = (
            sa.insert(chirps)
            .values(
                id=payload.chirp_id,
                body=payload.body,
                user_id=payload.user_id,
                created_at=created_at,
                updated_at=created_at,
            )
            .returning(*chirps.c)
        )

        async with self._session_factory() as session:
            result = await session.execute(statement)
            row = result.mappings().one()
            await session.commit()

        return _to_chirp_record(row)

    async def list_chirps(
        self,
        *,
        author_id: UUID | None = None,
        newest_first: bool = False,
    ) -> list[ChirpRecord]:
        """Return chirps ordered by creation time with id as a stable tiebreaker."""

        statement = sa.select(*chirps.c)
        if author_id is not None:
            statement = statement.where(chirps.c.user_id == author_id)
        if newest_first:
            statement = statement.order_by(chirps.c.created_at.desc(), chirps.c.id.desc())
        else:
            statement = statement.order_by(chirps.c.created_at.asc(), chirps.c.id.asc())

        async with self._session_factory() as session:
            result = await session.execute(statement)

        return [_to_chirp_record(row) for row in result.mappings().all()]

    async def get_by_id(self, *, chirp_id: UUID) -> ChirpRecord | None:
        statement = sa.select(*chirps.c).where(chirps.c.id == chirp_id).limit(1)

        async with self._session_factory() as session:
            result = await session.execute(statement)

        row = result.mappings().first()
        if row is None:
            return None
        return _to_chirp_record(row)

    async def delete_chirp(self, *, chirp_id: UUID) -> bool:
        statement = sa.delete(chirps).where(chirps.c.id == chirp_id)

        async with self._session_factory() as session:
            result = cast(CursorResult[Any], await session.execute(statement))
            await session.commit()

        return bool(result.rowcount)


def _to_chirp_record(row: sa.RowMapping) -> ChirpRecord:
    return ChirpRecord(
        chirp_id=as_uuid(row["id"]),
        body=cast(str, row["body"]),
        user_id=as_uuid(row["user_id"]),
        created_at=as_utc(row["created_at"]),
        updated_at=as_utc(row["updated_at"]),
    )
