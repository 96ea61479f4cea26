"""Authenticated caller identity scoped to one request."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class AuthenticatedPrincipal:
    """Identity extracted from a validated access token."""

    user_id: UUID
