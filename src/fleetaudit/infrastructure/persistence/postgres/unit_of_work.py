"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg_pool import AsyncConnectionPool

from fleetaudit.infrastructure.persistence.postgres.activity_repository import (
    PostgresActivityRepository,
)
from fleetaudit.infrastructure.persistence.postgres.audit_log_repository import (
    PostgresAuditLogRepository,
)
from fleetaudit.infrastructure.persistence.postgres.login_session_repository import (
    PostgresLoginSessionRepository,
)
from fleetaudit.infrastructure.persistence.postgres.settings_repository import (
    PostgresSettingsRepository,
)
from fleetaudit.infrastructure.persistence.postgres.user_repository import (
    PostgresUserRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._users = PostgresUserRepository(self._conn)
        self._settings = PostgresSettingsRepository(self._conn)
        self._audit_logs = PostgresAuditLogRepository(self._conn)
        self._activities = PostgresActivityRepository(self._conn)
        self._login_sessions = PostgresLoginSessionRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def users(self) -> PostgresUserRepository:
        return self._users

    @property
    def settings(self) -> PostgresSettingsRepository:
        return self._settings

    @property
    def audit_logs(self) -> PostgresAuditLogRepository:
        return self._audit_logs

    @property
    def activities(self) -> PostgresActivityRepository:
        return self._activities

    @property
    def login_sessions(self) -> PostgresLoginSessionRepository:
        return self._login_sessions

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager)."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        uow = PostgresUnitOfWork(pool)
        async with uow:
            try:
                yield uow
                await uow.commit()
            except BaseException:
                await uow.rollback()
                raise

    return factory
