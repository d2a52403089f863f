"""Unit tests for ShowcaseController."""

from datetime import datetime, timezone

import httpx
import pytest

from core.exceptions import RemoteServiceError
from domain.services.project_service import ProjectService
from domain.services.showcase_controller import ShowcaseController
from domain.state.catalog_state import CatalogEvent, ProjectInserted, ProjectsLoaded
from infrastructure.supabase.repositories.project_repo import SupabaseProjectRepository
from tests.fakes import InMemoryStore, make_project
from tests.unit.conftest import FakeRemoteService


@pytest.fixture
def controller(remote: FakeRemoteService) -> ShowcaseController:
    return ShowcaseController(remote, channel_name="projects_channel")


class TestMount:
    @pytest.mark.asyncio
    async def test_subscribes_then_loads(
        self, controller: ShowcaseController, remote: FakeRemoteService
    ):
        project = make_project("Aries App")
        remote.projects.list_all.return_value = [project]

        await controller.mount()

        assert controller.is_mounted
        assert len(remote.channels) == 1
        channel = remote.channels[0]
        assert channel.name == "projects_channel"
        channel.subscribe.assert_called_once_with(controller.receive)
        assert controller.catalog.projects == [project]
        assert controller.catalog.is_loading is False

    @pytest.mark.asyncio
    async def test_mount_is_idempotent(
        self, controller: ShowcaseController, remote: FakeRemoteService
    ):
        remote.projects.list_all.return_value = []

        await controller.mount()
        await controller.mount()

        assert len(remote.channels) == 1
        remote.projects.list_all.assert_called_once()

    @pytest.mark.asyncio
    async def test_malformed_fetch_is_a_load_failure(
        self, controller: ShowcaseController, remote: FakeRemoteService
    ):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[{"id": "not-a-uuid", "created_at": None}])

        http = httpx.AsyncClient(
            base_url="https://demo.supabase.co", transport=httpx.MockTransport(handler)
        )
        remote.projects = SupabaseProjectRepository(http, dict)

        await controller.mount()
        await http.aclose()

        assert controller.is_mounted
        assert controller.catalog.error == "Failed to fetch projects"
        assert controller.catalog.projects == []

    @pytest.mark.asyncio
    async def test_subscription_failure_still_loads(self, remote: FakeRemoteService):
        controller = ShowcaseController(remote)
        remote.projects.list_all.return_value = [make_project()]
        original_channel = remote.channel

        def failing_channel(name: str):
            channel = original_channel(name)
            channel.subscribe.side_effect = RemoteServiceError("Could not reach the remote service")
            return channel

        remote.channel = failing_channel  # type: ignore[method-assign]

        await controller.mount()

        assert len(controller.catalog) == 1
        assert controller.catalog.error is None

    @pytest.mark.asyncio
    async def test_fetch_failure_is_sticky(
        self, controller: ShowcaseController, remote: FakeRemoteService
    ):
        remote.projects.list_all.side_effect = RemoteServiceError("timeout")

        await controller.mount()

        assert controller.catalog.error == "Failed to fetch projects"
        assert controller.catalog.is_loading is False
        remote.projects.list_all.assert_called_once()

    @pytest.mark.asyncio
    async def test_unmount_unsubscribes_once(
        self, controller: ShowcaseController, remote: FakeRemoteService
    ):
        remote.projects.list_all.return_value = []
        await controller.mount()

        await controller.unmount()
        await controller.unmount()

        assert not controller.is_mounted
        remote.channels[0].unsubscribe.assert_called_once()


class TestReceive:
    @pytest.mark.asyncio
    async def test_appends_in_arrival_order(
        self, controller: ShowcaseController, remote: FakeRemoteService
    ):
        consilium = make_project(
            "Consilium", created_at=datetime(2025, 1, 2, tzinfo=timezone.utc)
        )
        aries = make_project("Aries App", created_at=datetime(2024, 12, 28, tzinfo=timezone.utc))
        remote.projects.list_all.return_value = [consilium, aries]
        await controller.mount()

        # older created_at, but it arrives last so it goes last
        late = make_project(
            "Password Generator", created_at=datetime(2024, 12, 29, tzinfo=timezone.utc)
        )
        controller.receive(late)

        titles = [p.title for p in controller.catalog.projects]
        assert titles == ["Consilium", "Aries App", "Password Generator"]

    @pytest.mark.asyncio
    async def test_push_during_fetch_survives_load(
        self, controller: ShowcaseController, remote: FakeRemoteService
    ):
        fetched = make_project("Aries App")
        pushed = make_project("Consilium")

        async def list_all():
            controller.receive(pushed)
            return [fetched]

        remote.projects.list_all.side_effect = list_all

        await controller.mount()

        assert controller.catalog.projects == [fetched, pushed]

    @pytest.mark.asyncio
    async def test_duplicate_push_is_ignored(
        self, controller: ShowcaseController, remote: FakeRemoteService
    ):
        project = make_project("Aries App")
        remote.projects.list_all.return_value = [project]
        await controller.mount()

        controller.receive(project)

        assert len(controller.catalog) == 1


class TestListeners:
    @pytest.mark.asyncio
    async def test_notified_only_on_change(
        self, controller: ShowcaseController, remote: FakeRemoteService
    ):
        project = make_project("Aries App")
        remote.projects.list_all.return_value = [project]
        events: list[CatalogEvent] = []
        controller.add_listener(events.append)

        await controller.mount()
        controller.receive(project)
        fresh = make_project("Consilium")
        controller.receive(fresh)

        assert isinstance(events[0], ProjectsLoaded)
        assert events[1:] == [ProjectInserted(fresh)]

    @pytest.mark.asyncio
    async def test_removed_listener_not_called(
        self, controller: ShowcaseController, remote: FakeRemoteService
    ):
        remote.projects.list_all.return_value = []
        events: list[CatalogEvent] = []
        remove = controller.add_listener(events.append)
        await controller.mount()

        remove()
        controller.receive(make_project())

        assert len(events) == 1

    @pytest.mark.asyncio
    async def test_visible_projects_filters(
        self, controller: ShowcaseController, remote: FakeRemoteService
    ):
        remote.projects.list_all.return_value = [
            make_project("Aries App"),
            make_project("Consilium"),
        ]
        await controller.mount()

        assert [p.title for p in controller.visible_projects("aRi")] == ["Aries App"]
        assert len(controller.visible_projects("")) == 2


class TestSubmissionFlow:
    @pytest.mark.asyncio
    async def test_created_project_appears_once(self):
        """The insert response is not applied; the push adds the card."""
        store = InMemoryStore()
        user = store.register("ada@example.com", "secret123")
        controller = ShowcaseController(store.client())
        await controller.mount()

        service = ProjectService(store.client(), default_image="https://img.example.com/d.png")
        created = await service.submit(user, "Aries App", "https://aries.example.com")

        assert [p.id for p in controller.catalog.projects] == [created.id]
        assert controller.catalog.projects[0].rating == 0
        await controller.unmount()
        assert store.channels == []
