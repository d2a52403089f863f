"""Remote data service protocol."""

from typing import Protocol

from domain.repositories.auth_gateway import IAuthGateway
from domain.repositories.profile_repository import IProfileRepository
from domain.repositories.project_repository import IProjectRepository
from domain.repositories.realtime_channel import IRealtimeChannel


class IRemoteDataService(Protocol):
    """The hosted backend: two tables, auth, and a push channel."""

    projects: IProjectRepository
    profiles: IProfileRepository
    auth: IAuthGateway

    def channel(self, name: str) -> IRealtimeChannel:
        """Create a channel subscribed to project inserts."""
        ...

    async def health(self) -> bool:
        """Check that the remote service answers."""
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...
