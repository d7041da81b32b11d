"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from fleetaudit.application.ports.repositories import (
    ActivityRepository,
    AuditLogRepository,
    LoginSessionRepository,
    SettingsRepository,
    UserRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def users(self) -> UserRepository: ...

    @property
    def settings(self) -> SettingsRepository: ...

    @property
    def audit_logs(self) -> AuditLogRepository: ...

    @property
    def activities(self) -> ActivityRepository: ...

    @property
    def login_sessions(self) -> LoginSessionRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
