"""Shared fixtures for unit tests."""

from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.session import AuthUser


class FakeRemoteService:
    """Fake remote service with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.projects = AsyncMock()
        self.profiles = AsyncMock()
        self.auth = AsyncMock()
        self.channels: list[AsyncMock] = []
        self.healthy = True
        self.closed = False

    def channel(self, name: str) -> AsyncMock:
        channel = AsyncMock()
        channel.name = name
        self.channels.append(channel)
        return channel

    async def health(self) -> bool:
        return self.healthy

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def remote() -> FakeRemoteService:
    """Create a fresh FakeRemoteService."""
    return FakeRemoteService()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def user(user_id: UUID) -> AuthUser:
    """A signed-in user."""
    return AuthUser(id=user_id, email="ada@example.com")
