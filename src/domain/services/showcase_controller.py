"""Top-level owner of the catalog and its push subscription."""

import logging
from typing import Callable

from core.config import settings
from core.exceptions import AppException
from domain.entities.project import Project
from domain.repositories.realtime_channel import IRealtimeChannel
from domain.repositories.remote_service import IRemoteDataService
from domain.state.catalog_state import (
    CatalogEvent,
    CatalogState,
    ProjectInserted,
    ProjectsLoaded,
    ProjectsLoadFailed,
)

logger = logging.getLogger(__name__)

CatalogListener = Callable[[CatalogEvent], None]


class ShowcaseController:
    """Keeps a ``CatalogState`` in sync with the remote ``projects`` table.

    ``mount`` joins the push channel and runs the one-shot fetch;
    ``unmount`` leaves the channel. Pushed rows only become events here;
    ``dispatch`` is the single place they are applied.
    """

    def __init__(
        self,
        remote: IRemoteDataService,
        channel_name: str = settings.realtime_channel,
    ) -> None:
        self._remote = remote
        self._channel_name = channel_name
        self._channel: IRealtimeChannel | None = None
        self._listeners: list[CatalogListener] = []
        self.catalog = CatalogState()

    @property
    def is_mounted(self) -> bool:
        return self._channel is not None

    async def mount(self) -> None:
        if self._channel is not None:
            return
        self._channel = self._remote.channel(self._channel_name)
        try:
            await self._channel.subscribe(self.receive)
        except AppException as exc:
            # The grid still loads; it just stops updating live.
            logger.warning("Realtime subscription to %s failed: %s", self._channel_name, exc.message)
        await self.load()

    async def unmount(self) -> None:
        if self._channel is None:
            return
        channel, self._channel = self._channel, None
        await channel.unsubscribe()

    async def load(self) -> None:
        """Fetch all projects once. Failure is sticky; nothing retries."""
        try:
            projects = await self._remote.projects.list_all()
        except AppException as exc:
            logger.warning("Fetching projects failed: %s", exc.message)
            self.dispatch(ProjectsLoadFailed())
            return
        self.dispatch(ProjectsLoaded(tuple(projects)))

    def receive(self, project: Project) -> None:
        """Push channel callback."""
        self.dispatch(ProjectInserted(project))

    def dispatch(self, event: CatalogEvent) -> None:
        if not self.catalog.apply(event):
            return
        for listener in list(self._listeners):
            listener(event)

    def add_listener(self, listener: CatalogListener) -> Callable[[], None]:
        """Register a change listener and return a function that removes it."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def visible_projects(self, query: str = "") -> list[Project]:
        return self.catalog.filter(query)
