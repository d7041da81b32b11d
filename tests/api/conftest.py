"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from fleetaudit.config import Settings
from fleetaudit.infrastructure.auth.keycloak_provider import OIDCUser
from fleetaudit.infrastructure.session.memory_registry import InMemorySessionRegistry
from fleetaudit.main import build_app


class FakeTokenProvider:
    """Treats the bearer token as the user id for known users."""

    def __init__(self, user_ids: set[str]) -> None:
        self._user_ids = user_ids

    def decode_token(self, token: str) -> OIDCUser | None:
        if token not in self._user_ids:
            return None
        return OIDCUser(user_id=token, email=f"{token}@fleet.test", username=token)


def bearer(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {user_id}"}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        cors_origins="http://localhost:3000",
        environment="development",
        session_registry="memory",
    )


@pytest.fixture
def registry() -> InMemorySessionRegistry:
    return InMemorySessionRegistry()


@pytest.fixture
def app(uow_factory, registry, settings):
    """Falcon ASGI app wired to in-memory adapters."""
    provider = FakeTokenProvider({"admin-1", "manager-1", "user-1", "ghost"})
    return build_app(uow_factory, registry, token_provider=provider, settings=settings)


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
