"""Ownership and deployment-platform checks for protected operations."""

from __future__ import annotations

from uuid import UUID

from chirpy.domain.auth.errors import ForbiddenError


class AccessGuardService:
    """Enforce resource ownership and platform gates, raising ``ForbiddenError``."""

    def require_owner(self, *, identity: UUID | str, resource_owner_id: UUID | str) -> None:
        """Allow only the resource owner to proceed."""

        if str(identity) != str(resource_owner_id):
            raise ForbiddenError("caller does not own resource")

    def require_platform(self, *, current_platform: str, required_platform: str) -> None:
        """Allow destructive administrative operations only on the required platform."""

        if current_platform != required_platform:
            raise ForbiddenError(f"operation requires platform {required_platform}")
