"""SQLAlchemy adapter for user account persistence."""

from __future__ import annotations

from typing import cast
from uuid import UUID

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from chirpy.application.ports.user_repository_port import (
    EmailAlreadyRegisteredError,
    UserCreateInput,
    UserRecord,
    UserRepositoryPort,
)
from chirpy.infrastructure.db._rows import as_utc, as_uuid
from chirpy.infrastructure.db.metadata import users


class SqlAlchemyUserRepository(UserRepositoryPort):
    """User repository backed by SQLAlchemy async sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_by_email(self, *, email: str) -> UserRecord | None:
        statement = sa.select(*users.c).where(users.c.email == email).limit(1)
        return await self._fetch_one(statement)

    async def create_user(self, payload: UserCreateInput) -> UserRecord:
        """Insert one user row and map unique-email violations to a domain error."""

        statement = (
            sa.insert(users)
            .values(
                id=payload.user_id,
                email=payload.email,
                password_hash=payload.password_hash,
            )
            .returning(*users.c)
        )
        return await self._write_one(statement, email=payload.email)

    async def update_credentials(
        self,
        *,
        user_id: UUID,
        email: str,
        password_hash: str,
    ) -> UserRecord | None:
        statement = (
            sa.update(users)
            .where(users.c.id == user_id)
            .values(
                email=email,
                password_hash=password_hash,
                updated_at=sa.text("CURRENT_TIMESTAMP"),
            )
            .returning(*users.c)
        )
        return await self._write_optional(statement, email=email)

    async def update_password_hash(self, *, user_id: UUID, password_hash: str) -> None:
        statement = (
            sa.update(users)
            .where(users.c.id == user_id)
            .values(password_hash=password_hash, updated_at=sa.text("CURRENT_TIMESTAMP"))
        )
        async with self._session_factory() as session:
            await session.execute(statement)
            await session.commit()

    async def set_chirpy_red(self, *, user_id: UUID, is_chirpy_red: bool) -> UserRecord | None:
        statement = (
            sa.update(users)
            .where(users.c.id == user_id)
            .values(
                is_chirpy_red=is_chirpy_red,
                updated_at=sa.text("CURRENT_TIMESTAMP"),
            )
            .returning(*users.c)
        )
        async with self._session_factory() as session:
            result = await session.execute(statement)
            row = result.mappings().first()
            await session.commit()

        return None if row is None else _to_user_record(row)

    async def _fetch_one(self, statement: sa.Select[tuple[object, ...]]) -> UserRecord | None:
        async with self._session_factory() as session:
            result = await session.execute(statement)

        row = result.mappings().first()
        if row is None:
            return None
        return _to_user_record(row)

    async def _write_one(self, statement: sa.Executable, *, email: str) -> UserRecord:
        record = await self._write_optional(statement, email=email)
        if record is None:  # pragma: no cover - insert ... returning always yields a row.
            raise RuntimeError("user insert returned no row")
        return record

    async def _write_optional(self, statement: sa.Executable, *, email: str) -> UserRecord | None:
        async with self._session_factory() as session:
            try:
                result = await session.execute(statement)
                row = result.mappings().first()
                await session.commit()
            except IntegrityError as error:
                await session.rollback()
                if _is_duplicate_email_error(error):
                    raise EmailAlreadyRegisteredError(email=email) from error
                raise

        return None if row is None else _to_user_record(row)


def _is_duplicate_email_error(error: IntegrityError) -> bool:
    message = str(error.orig).lower()
    return "email" in message


def _to_user_record(row: sa.RowMapping) -> UserRecord:
    return UserRecord(
        user_id=as_uuid(row["id"]),
        email=cast(str, row["email"]),
        password_hash=cast(str, row["password_hash"]),
        is_chirpy_red=bool(row["is_chirpy_red"]),
        created_at=as_utc(row["created_at"]),
        updated_at=as_utc(row["updated_at"]),
    )
