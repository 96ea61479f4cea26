"""SQLAlchemy adapter for development-only full data resets."""

from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from chirpy.application.ports.data_reset_port import DataResetPort
from chirpy.infrastructure.db.metadata import chirps, refresh_tokens, users


class SqlAlchemyDataResetRepository(DataResetPort):
    """Delete every row owned by users, children first, in one transaction."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def delete_all(self) -> None:
        async with self._session_factory() as session, session.begin():
            await session.execute(sa.delete(refresh_tokens))
            await session.execute(sa.delete(chirps))
            await session.execute(sa.delete(users))
