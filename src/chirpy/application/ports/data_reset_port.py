"""Port for destructive development-only data resets."""

from __future__ import annotations

from typing import Protocol


class DataResetPort(Protocol):
    """Reset contract used by the administrative reset endpoint."""

    async def delete_all(self) -> None:
        """Delete all refresh tokens, chirps, and users in one transaction."""
