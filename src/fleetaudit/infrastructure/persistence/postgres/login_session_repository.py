"""PostgreSQL login session repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from fleetaudit.application.dto.queries import LoginHistoryQuery
from fleetaudit.domain.entities import LoginSession
from fleetaudit.infrastructure.persistence.postgres.filters import build_where

_COLUMNS = (
    "id, user_id, login_time, ip_address, user_agent, is_active, logout_time, session_duration"
)


def _row_to_session(r: tuple) -> LoginSession:
    return LoginSession(
        id=r[0],
        user_id=r[1],
        login_time=r[2],
        ip_address=r[3],
        user_agent=r[4],
        is_active=r[5],
        logout_time=r[6],
        session_duration=r[7],
    )


class PostgresLoginSessionRepository:
    """Login history repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, login_session_id: UUID) -> LoginSession | None:
        """Get login session by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM login_history WHERE id = %s",
            (login_session_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _row_to_session(r)

    async def create(self, login_session: LoginSession) -> LoginSession:
        """Create login session."""
        await self._conn.execute(
            f"INSERT INTO login_history ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
            (
                login_session.id,
                login_session.user_id,
                login_session.login_time,
                login_session.ip_address,
                login_session.user_agent,
                login_session.is_active,
                login_session.logout_time,
                login_session.session_duration,
            ),
        )
        return login_session

    async def update(self, login_session: LoginSession) -> None:
        """Persist logout time, duration and active flag."""
        await self._conn.execute(
            "UPDATE login_history SET logout_time=%s, session_duration=%s, is_active=%s WHERE id=%s",
            (
                login_session.logout_time,
                login_session.session_duration,
                login_session.is_active,
                login_session.id,
            ),
        )

    async def list(self, query: LoginHistoryQuery) -> tuple[list[LoginSession], int]:
        """List login sessions by login time, newest first, with total count."""
        where, params = build_where(
            {"user_id": query.user_id, "is_active": query.is_active},
            time_column="login_time",
            start=query.start_date,
            end=query.end_date,
        )
        cur = await self._conn.execute(f"SELECT count(*) FROM login_history{where}", tuple(params))
        total = (await cur.fetchone())[0]
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM login_history{where} ORDER BY login_time DESC LIMIT %s OFFSET %s",
            (*params, query.limit, query.offset),
        )
        rows = await cur.fetchall()
        return [_row_to_session(r) for r in rows], total
