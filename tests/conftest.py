"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path
from uuid import uuid4

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities.profile import Profile
from domain.entities.session import AuthUser
from domain.services.showcase_controller import ShowcaseController
from infrastructure.auth.jwt_provider import JWTAuthProvider
from tests.fakes import InMemoryRemoteService, InMemoryStore

# Fixed test user ID for consistency
TEST_USER_ID = uuid4()
TEST_PASSWORD = "correct-horse-battery"


@pytest.fixture
def test_user() -> AuthUser:
    """Create a test user with fixed ID."""
    return AuthUser(id=TEST_USER_ID, email="test@example.com")


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_token(auth_provider: JWTAuthProvider, test_user: AuthUser) -> str:
    """Create auth token for test user."""
    return str(auth_provider.create_token(test_user))


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def store(test_user: AuthUser) -> InMemoryStore:
    """Remote service state with the test user registered and a profile row."""
    store = InMemoryStore()
    store.register(test_user.email, TEST_PASSWORD, user_id=test_user.id)
    store.profiles[test_user.id] = Profile(
        id=test_user.id, name="Test User", email=test_user.email
    )
    return store


@pytest.fixture
async def controller(store: InMemoryStore) -> AsyncGenerator[ShowcaseController, None]:
    """Catalog controller mounted against the in-memory store."""
    controller = ShowcaseController(store.client(), channel_name="projects_channel")
    await controller.mount()
    yield controller
    await controller.unmount()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no overrides, no lifespan)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def app(
    store: InMemoryStore,
    controller: ShowcaseController,
    auth_provider: JWTAuthProvider,
) -> FastAPI:
    """
    Application wired to the in-memory store.

    - Every request gets a fresh client view of the store
    - Bearer tokens are validated with the test provider
    - The mounted controller stands in for the lifespan
    """
    from api.dependencies.auth import get_auth_provider
    from api.dependencies.remote import get_remote_service
    from main import create_app

    app = create_app()

    async def override_get_remote_service() -> AsyncGenerator[InMemoryRemoteService, None]:
        remote = store.client()
        try:
            yield remote
        finally:
            await remote.aclose()

    def override_get_auth_provider() -> JWTAuthProvider:
        return auth_provider

    app.dependency_overrides[get_remote_service] = override_get_remote_service
    app.dependency_overrides[get_auth_provider] = override_get_auth_provider
    app.state.controller = controller
    return app


@pytest.fixture
async def api_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Test client without credentials."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def authenticated_client(
    app: FastAPI, auth_headers: dict[str, str]
) -> AsyncGenerator[AsyncClient, None]:
    """Test client that sends the test user's bearer token."""
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test", headers=auth_headers
    ) as c:
        yield c
    app.dependency_overrides.clear()
