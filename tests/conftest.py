"""Pytest fixtures for fleetaudit tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from unittest.mock import AsyncMock
from uuid import UUID

import pytest

from fleetaudit.application.dto.queries import ActivityQuery, AuditLogQuery, LoginHistoryQuery
from fleetaudit.domain.entities import ActivityEntry, Actor, AuditEntry, LoginSession
from fleetaudit.domain.permissions.normalize import load_settings_snapshot
from fleetaudit.domain.permissions.snapshot import SettingsSnapshot
from fleetaudit.domain.value_objects import Role


def _in_range(value: datetime, start: datetime | None, end: datetime | None) -> bool:
    if start is not None and value < start:
        return False
    if end is not None and value > end:
        return False
    return True


def _page(items: list, key, query) -> tuple[list, int]:
    items = sorted(items, key=key, reverse=True)
    return items[query.offset : query.offset + query.limit], len(items)


# --- Fake repositories ---


class FakeUserRepository:
    """In-memory user profiles."""

    def __init__(self) -> None:
        self._by_id: dict[str, Actor] = {}

    def add(self, actor: Actor) -> Actor:
        self._by_id[actor.id] = actor
        return actor

    async def get_by_id(self, user_id: str) -> Actor | None:
        return self._by_id.get(user_id)

    async def get_many(self, user_ids) -> dict[str, Actor]:
        return {i: self._by_id[i] for i in set(user_ids) if i in self._by_id}


class FakeSettingsRepository:
    """Holds the single settings record as stored."""

    def __init__(self) -> None:
        self.raw: dict | None = None

    def set_raw(self, raw: dict | None) -> None:
        self.raw = raw

    async def get_permissions(self) -> dict | None:
        return self.raw

    async def get_permission_snapshot(self) -> SettingsSnapshot:
        return load_settings_snapshot(self.raw)

    async def save_permissions(self, role_permissions: dict, user_permissions: dict) -> None:
        self.raw = {"rolePermissions": role_permissions, "userPermissions": user_permissions}


class FakeAuditLogRepository:
    """Append-only in-memory audit log."""

    def __init__(self) -> None:
        self.entries: list[AuditEntry] = []

    async def create(self, entry: AuditEntry) -> AuditEntry:
        self.entries.append(entry)
        return entry

    async def list(self, query: AuditLogQuery) -> tuple[list[AuditEntry], int]:
        items = [
            e
            for e in self.entries
            if (query.user_id is None or e.user_id == query.user_id)
            and (query.action is None or e.action == query.action)
            and (query.entity_type is None or e.entity_type == query.entity_type)
            and (query.entity_id is None or e.entity_id == query.entity_id)
            and _in_range(e.created_at, query.start_date, query.end_date)
        ]
        return _page(items, lambda e: e.created_at, query)


class FakeActivityRepository:
    """Append-only in-memory activity log."""

    def __init__(self) -> None:
        self.entries: list[ActivityEntry] = []

    async def create(self, entry: ActivityEntry) -> ActivityEntry:
        self.entries.append(entry)
        return entry

    async def list(self, query: ActivityQuery) -> tuple[list[ActivityEntry], int]:
        items = [
            e
            for e in self.entries
            if (query.user_id is None or e.user_id == query.user_id)
            and (query.action is None or e.action == query.action)
            and (query.entity_type is None or e.entity_type == query.entity_type)
            and _in_range(e.created_at, query.start_date, query.end_date)
        ]
        return _page(items, lambda e: e.created_at, query)


class FakeLoginSessionRepository:
    """In-memory login history."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, LoginSession] = {}

    async def get_by_id(self, login_session_id: UUID) -> LoginSession | None:
        return self._by_id.get(login_session_id)

    async def create(self, login_session: LoginSession) -> LoginSession:
        self._by_id[login_session.id] = login_session
        return login_session

    async def update(self, login_session: LoginSession) -> None:
        self._by_id[login_session.id] = login_session

    async def list(self, query: LoginHistoryQuery) -> tuple[list[LoginSession], int]:
        items = [
            s
            for s in self._by_id.values()
            if (query.user_id is None or s.user_id == query.user_id)
            and (query.is_active is None or s.is_active == query.is_active)
            and _in_range(s.login_time, query.start_date, query.end_date)
        ]
        return _page(items, lambda s: s.login_time, query)

    def all(self) -> list[LoginSession]:
        return list(self._by_id.values())


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.users = FakeUserRepository()
        self.settings = FakeSettingsRepository()
        self.audit_logs = FakeAuditLogRepository()
        self.activities = FakeActivityRepository()
        self.login_sessions = FakeLoginSessionRepository()

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def shared_uow_factory(uow: FakeUnitOfWork):
    """Factory that yields the same FakeUnitOfWork on every call."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return _factory


class FixedClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork with admin, manager and user profiles."""
    uow = FakeUnitOfWork()
    uow.users.add(Actor(id="admin-1", role=Role.ADMIN, name="Ada Admin", email="ada@fleet.test"))
    uow.users.add(Actor(id="manager-1", role=Role.MANAGER, name="Max Manager", email="max@fleet.test"))
    uow.users.add(Actor(id="user-1", role=Role.USER, name="Uma User", email="uma@fleet.test"))
    return uow


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager with the test's FakeUnitOfWork."""
    return shared_uow_factory(fake_uow)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2026, 3, 1, 9, 0, 0, tzinfo=UTC))


@pytest.fixture
def mock_permission_checker():
    """AsyncMock for PermissionChecker - returns True by default."""
    mock = AsyncMock()
    mock.check.return_value = True
    return mock
