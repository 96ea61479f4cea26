from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from chirpy.application.ports.user_repository_port import (
    EmailAlreadyRegisteredError,
    UserCreateInput,
    UserRecord,
)
from chirpy.application.services.polka_webhook_service import (
    PolkaWebhookOutcome,
    PolkaWebhookService,
)
from chirpy.application.services.user_service import (
    InvalidUserInputError,
    UserNotFoundError,
    UserService,
)

FIXED_NOW = datetime(2026, 2, 15, 12, 0, 0, tzinfo=UTC)


@dataclass
class FakeUserRepository:
    users_by_id: dict[UUID, UserRecord] = field(default_factory=dict)

    async def get_by_email(self, *, email: str) -> UserRecord | None:
        return next((u for u in self.users_by_id.values() if u.email == email), None)

    async def create_user(self, payload: UserCreateInput) -> UserRecord:
        if await self.get_by_email(email=payload.email) is not None:
            raise EmailAlreadyRegisteredError(email=payload.email)
        record = UserRecord(
            user_id=payload.user_id,
            email=payload.email,
            password_hash=payload.password_hash,
            is_chirpy_red=False,
            created_at=FIXED_NOW,
            updated_at=FIXED_NOW,
        )
        self.users_by_id[record.user_id] = record
        return record

    async def update_credentials(
        self,
        *,
        user_id: UUID,
        email: str,
        password_hash: str,
    ) -> UserRecord | None:
        current = self.users_by_id.get(user_id)
        if current is None:
            return None
        updated = replace(current, email=email, password_hash=password_hash)
        self.users_by_id[user_id] = updated
        return updated

    async def set_chirpy_red(self, *, user_id: UUID, is_chirpy_red: bool) -> UserRecord | None:
        current = self.users_by_id.get(user_id)
        if current is None:
            return None
        updated = replace(current, is_chirpy_red=is_chirpy_red)
        self.users_by_id[user_id] = updated
        return updated


class FakePasswordHasher:
    def hash_password(self, password: str) -> str:
        return f"hashed::{password}"

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        return password_hash == f"hashed::{password}"

    def dummy_hash(self) -> str:
        return "hashed::dummy"


def _service(users: FakeUserRepository | None = None) -> tuple[UserService, FakeUserRepository]:
    repository = users or FakeUserRepository()
    return UserService(users=repository, password_hasher=FakePasswordHasher()), repository


@pytest.mark.asyncio
async def test_register_user_normalizes_email_and_stores_hash_only() -> None:
    service, repository = _service()

    user = await service.register_user(email="  Saul@Bettercall.com ", password="04234")

    assert user.email == "saul@bettercall.com"
    assert user.password_hash == "hashed::04234"
    assert user.is_chirpy_red is False
    assert repository.users_by_id == {user.user_id: user}


@pytest.mark.asyncio
@pytest.mark.parametrize(("email", "password"), [("", "pw"), ("   ", "pw"), ("a@b.com", "")])
async def test_register_user_rejects_blank_fields(email: str, password: str) -> None:
    service, repository = _service()

    with pytest.raises(InvalidUserInputError):
        await service.register_user(email=email, password=password)

    assert repository.users_by_id == {}


@pytest.mark.asyncio
async def test_register_user_propagates_duplicate_email() -> None:
    service, _ = _service()
    await service.register_user(email="a@b.com", password="pw")

    with pytest.raises(EmailAlreadyRegisteredError):
        await service.register_user(email="A@B.com", password="other")


@pytest.mark.asyncio
async def test_update_credentials_replaces_email_and_hash() -> None:
    service, _ = _service()
    user = await service.register_user(email="a@b.com", password="old")

    updated = await service.update_credentials(
        user_id=user.user_id,
        email="new@b.com",
        password="new",
    )

    assert updated.email == "new@b.com"
    assert updated.password_hash == "hashed::new"


@pytest.mark.asyncio
async def test_update_credentials_for_missing_user_raises_not_found() -> None:
    service, _ = _service()

    with pytest.raises(UserNotFoundError):
        await service.update_credentials(user_id=uuid4(), email="a@b.com", password="pw")


@pytest.mark.asyncio
async def test_polka_upgrade_event_marks_user_as_chirpy_red() -> None:
    service, repository = _service()
    user = await service.register_user(email="a@b.com", password="pw")
    webhooks = PolkaWebhookService(user_service=service)

    result = await webhooks.handle(event="user.upgraded", user_id=user.user_id)

    assert result.outcome is PolkaWebhookOutcome.UPGRADED
    assert repository.users_by_id[user.user_id].is_chirpy_red is True


@pytest.mark.asyncio
async def test_polka_other_events_are_ignored() -> None:
    service, repository = _service()
    user = await service.register_user(email="a@b.com", password="pw")
    webhooks = PolkaWebhookService(user_service=service)

    result = await webhooks.handle(event="user.payment_failed", user_id=user.user_id)

    assert result.outcome is PolkaWebhookOutcome.IGNORED
    assert repository.users_by_id[user.user_id].is_chirpy_red is False


@pytest.mark.asyncio
async def test_polka_upgrade_for_unknown_user_reports_not_found() -> None:
    service, _ = _service()
    webhooks = PolkaWebhookService(user_service=service)

    result = await webhooks.handle(event="user.upgraded", user_id=uuid4())

    assert result.outcome is PolkaWebhookOutcome.USER_NOT_FOUND
