from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path
from uuid import UUID, uuid4

import pytest
import sqlalchemy as sa
from alembic.config import Config

from alembic import command
from chirpy.application.ports.refresh_token_repository_port import RefreshTokenCreateInput
from chirpy.domain.auth.errors import StorageError
from chirpy.infrastructure.db.refresh_token_repository import SqlAlchemyRefreshTokenRepository
from chirpy.infrastructure.db.session import create_session_factory


def _upgrade_head(tmp_path: Path, filename: str) -> tuple[str, str]:
    db_path = tmp_path / filename
    sync_url = f"sqlite+pysqlite:///{db_path}"
    async_url = f"sqlite+aiosqlite:///{db_path}"

    alembic_config = Config("alembic.ini")
    alembic_config.set_main_option("sqlalchemy.url", sync_url)
    command.upgrade(alembic_config, "head")

    return sync_url, async_url


def _insert_user(sync_url: str) -> UUID:
    user_id = uuid4()
    engine = sa.create_engine(sync_url)
    with engine.begin() as connection:
        connection.execute(
            sa.text("INSERT INTO users (id, email, password_hash) VALUES (:id, :email, :hash)"),
            {"id": user_id.hex, "email": f"{user_id.hex}@example.org", "hash": "hash"},
        )
    return user_id


@pytest.mark.asyncio
async def test_create_and_get_round_trip_preserves_user_and_expiry(tmp_path: Path) -> None:
    sync_url, async_url = _upgrade_head(tmp_path, "refresh_tokens_create.db")
    user_id = _insert_user(sync_url)
    repository = SqlAlchemyRefreshTokenRepository(create_session_factory(async_url))
    expires_at = datetime(2030, 1, 1, 12, 0, 0, tzinfo=UTC)

    created = await repository.create_token(
        RefreshTokenCreateInput(token="a" * 64, user_id=user_id, expires_at=expires_at)
    )
    fetched = await repository.get_by_token(token="a" * 64)

    assert created.user_id == user_id
    assert created.revoked_at is None
    assert fetched is not None
    assert fetched.user_id == user_id
    assert fetched.expires_at == expires_at
    assert fetched.revoked_at is None
    assert fetched.is_usable(now=expires_at - timedelta(days=1)) is True


@pytest.mark.asyncio
async def test_get_unknown_token_returns_none(tmp_path: Path) -> None:
    _, async_url = _upgrade_head(tmp_path, "refresh_tokens_missing.db")
    repository = SqlAlchemyRefreshTokenRepository(create_session_factory(async_url))

    assert await repository.get_by_token(token="missing") is None


@pytest.mark.asyncio
async def test_revoke_marks_token_revoked(tmp_path: Path) -> None:
    sync_url, async_url = _upgrade_head(tmp_path, "refresh_tokens_revoke.db")
    user_id = _insert_user(sync_url)
    repository = SqlAlchemyRefreshTokenRepository(create_session_factory(async_url))
    await repository.create_token(
        RefreshTokenCreateInput(
            token="b" * 64,
            user_id=user_id,
            expires_at=datetime.now(tz=UTC) + timedelta(days=60),
        )
    )

    await repository.revoke_token(token="b" * 64)
    fetched = await repository.get_by_token(token="b" * 64)

    assert fetched is not None
    assert fetched.revoked_at is not None
    assert fetched.is_revoked is True


@pytest.mark.asyncio
async def test_second_revoke_keeps_first_revocation_timestamp(tmp_path: Path) -> None:
    sync_url, async_url = _upgrade_head(tmp_path, "refresh_tokens_revoke_twice.db")
    user_id = _insert_user(sync_url)
    repository = SqlAlchemyRefreshTokenRepository(create_session_factory(async_url))
    await repository.create_token(
        RefreshTokenCreateInput(
            token="c" * 64,
            user_id=user_id,
            expires_at=datetime(2030, 1, 1, tzinfo=UTC),
        )
    )
    engine = sa.create_engine(sync_url)
    with engine.begin() as connection:
        connection.execute(
            sa.text("UPDATE refresh_tokens SET revoked_at = :revoked_at WHERE token = :token"),
            {"revoked_at": "2026-01-01 00:00:00.000000", "token": "c" * 64},
        )

    await repository.revoke_token(token="c" * 64)
    fetched = await repository.get_by_token(token="c" * 64)

    assert fetched is not None
    assert fetched.revoked_at == datetime(2026, 1, 1, tzinfo=UTC)


@pytest.mark.asyncio
async def test_revoke_unknown_token_is_a_no_op(tmp_path: Path) -> None:
    _, async_url = _upgrade_head(tmp_path, "refresh_tokens_revoke_unknown.db")
    repository = SqlAlchemyRefreshTokenRepository(create_session_factory(async_url))

    await repository.revoke_token(token="never-issued")

    assert await repository.get_by_token(token="never-issued") is None


@pytest.mark.asyncio
async def test_driver_failures_surface_as_storage_error(tmp_path: Path) -> None:
    async_url = f"sqlite+aiosqlite:///{tmp_path / 'no_schema.db'}"
    repository = SqlAlchemyRefreshTokenRepository(create_session_factory(async_url))

    with pytest.raises(StorageError):
        await repository.get_by_token(token="anything")
    with pytest.raises(StorageError):
        await repository.revoke_token(token="anything")
