from __future__ import annotations

from pathlib import Path

import sqlalchemy as sa
from alembic.config import Config

from alembic import command


def _alembic_config(database_url: str) -> Config:
    alembic_config = Config("alembic.ini")
    alembic_config.set_main_option("sqlalchemy.url", database_url)
    return alembic_config


def _upgrade_head(tmp_path: Path) -> str:
    database_url = f"sqlite+pysqlite:///{tmp_path / 'chirpy_migration.db'}"
    command.upgrade(_alembic_config(database_url), "head")
    return database_url


def test_migration_creates_required_tables(tmp_path: Path) -> None:
    engine = sa.create_engine(_upgrade_head(tmp_path))

    table_names = set(sa.inspect(engine).get_table_names())

    assert {"users", "chirps", "refresh_tokens"} <= table_names


def test_migration_creates_email_unique_constraint_and_indexes(tmp_path: Path) -> None:
    engine = sa.create_engine(_upgrade_head(tmp_path))
    inspector = sa.inspect(engine)

    users_uniques = {
        tuple(constraint["column_names"]) for constraint in inspector.get_unique_constraints("users")
    }
    chirp_indexes = {index["name"] for index in inspector.get_indexes("chirps")}
    token_indexes = {index["name"] for index in inspector.get_indexes("refresh_tokens")}

    assert ("email",) in users_uniques
    assert "ix_chirps_user_id_created_at" in chirp_indexes
    assert "ix_refresh_tokens_user_id" in token_indexes


def test_refresh_tokens_revoked_at_is_nullable(tmp_path: Path) -> None:
    engine = sa.create_engine(_upgrade_head(tmp_path))

    columns = {
        column["name"]: column for column in sa.inspect(engine).get_columns("refresh_tokens")
    }

    assert columns["revoked_at"]["nullable"] is True
    assert columns["expires_at"]["nullable"] is False


def test_migration_downgrade_drops_tables(tmp_path: Path) -> None:
    database_url = _upgrade_head(tmp_path)

    command.downgrade(_alembic_config(database_url), "base")

    table_names = set(sa.inspect(sa.create_engine(database_url)).get_table_names())
    assert not {"users", "chirps", "refresh_tokens"} & table_names
