"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Remote ``profiles`` table."""

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by user ID."""
        ...

    async def create(self, profile: Profile) -> None:
        """Insert a profile row."""
        ...

    async def update(
        self, id: UUID, name: str | None = None, email: str | None = None
    ) -> None:
        """Update the given fields of a profile row."""
        ...

    async def delete(self, id: UUID) -> None:
        """Delete a profile row."""
        ...
