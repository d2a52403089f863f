"""Realtime channel protocol."""

from typing import Callable, Protocol

from domain.entities.project import Project

ProjectListener = Callable[[Project], None]


class IRealtimeChannel(Protocol):
    """Push subscription delivering newly inserted projects.

    Delivery is at-least-once with no ordering guarantee relative to a
    concurrent fetch.
    """

    async def subscribe(self, listener: ProjectListener) -> None:
        """Join the channel and start delivering inserts to ``listener``."""
        ...

    async def unsubscribe(self) -> None:
        """Leave the channel and release the connection."""
        ...
