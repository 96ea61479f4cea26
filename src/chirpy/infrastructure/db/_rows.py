"""Row conversion helpers shared by SQLAlchemy adapters."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID


def as_uuid(value: object) -> UUID:
    """Return a UUID for drivers that hand back hex strings."""

    return value if isinstance(value, UUID) else UUID(str(value))


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps returned by drivers without timezone support."""

    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def as_optional_utc(value: datetime | None) -> datetime | None:
    return None if value is None else as_utc(value)
