"""In-memory project catalog.

The catalog is loaded once by a fetch-all and then grows only through
``ProjectInserted`` events. Events are applied in arrival order and never
re-sorted, so after a push the grid reads "fetched order, then arrival
order" rather than strict ``created_at`` order.
"""

from dataclasses import dataclass
from typing import Union
from uuid import UUID

from domain.entities.project import Project

FETCH_ERROR_MESSAGE = "Failed to fetch projects"


@dataclass(frozen=True, slots=True)
class ProjectsLoaded:
    """The initial fetch succeeded."""

    projects: tuple[Project, ...]


@dataclass(frozen=True, slots=True)
class ProjectsLoadFailed:
    """The initial fetch failed; the error is sticky."""

    message: str = FETCH_ERROR_MESSAGE


@dataclass(frozen=True, slots=True)
class ProjectInserted:
    """A row insert delivered by the push channel."""

    project: Project


CatalogEvent = Union[ProjectsLoaded, ProjectsLoadFailed, ProjectInserted]


def filter_projects(projects: list[Project], query: str) -> list[Project]:
    """Case-insensitive substring match of ``query`` against titles."""
    needle = query.lower()
    if not needle:
        return list(projects)
    return [project for project in projects if needle in project.title.lower()]


class CatalogState:
    """Ordered list of projects plus its loading and error flags."""

    def __init__(self) -> None:
        self._projects: list[Project] = []
        self._ids: set[UUID] = set()
        self._pending: list[Project] = []
        self.is_loading = True
        self.error: str | None = None

    @property
    def projects(self) -> list[Project]:
        """A copy of the current sequence."""
        return list(self._projects)

    def __len__(self) -> int:
        return len(self._projects)

    def filter(self, query: str) -> list[Project]:
        return filter_projects(self._projects, query)

    def apply(self, event: CatalogEvent) -> bool:
        """Apply one event. Returns True when the visible state changed."""
        if isinstance(event, ProjectsLoaded):
            return self._load(event.projects)
        if isinstance(event, ProjectsLoadFailed):
            self.error = event.message
            self._flush_pending()
            return True
        if isinstance(event, ProjectInserted):
            if self.is_loading:
                # Held back so the fetch result cannot overwrite it.
                self._pending.append(event.project)
                return False
            return self._append(event.project)
        raise TypeError(f"Unknown catalog event: {event!r}")

    def _load(self, projects: tuple[Project, ...]) -> bool:
        self._projects = []
        self._ids = set()
        for project in projects:
            self._append(project)
        self._flush_pending()
        return True

    def _flush_pending(self) -> None:
        pending, self._pending = self._pending, []
        for project in pending:
            self._append(project)
        self.is_loading = False

    def _append(self, project: Project) -> bool:
        if project.id in self._ids:
            return False
        self._ids.add(project.id)
        self._projects.append(project)
        return True
