"""PostgreSQL session registry - session bindings shared across processes."""

from psycopg_pool import AsyncConnectionPool

from fleetaudit.domain.entities import SessionBinding

_COLUMNS = "session_id, user_id, login_history_id, created_at"


class PostgresSessionRegistry:
    """Session registry backed by the session_binding table.

    Each call runs in its own short transaction; release uses
    DELETE ... RETURNING so a binding is handed out at most once.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def bind(self, binding: SessionBinding) -> None:
        async with self._pool.connection() as conn:
            await conn.execute(
                f"INSERT INTO session_binding ({_COLUMNS}) VALUES (%s, %s, %s, %s) "
                "ON CONFLICT (session_id) DO UPDATE SET user_id = EXCLUDED.user_id, "
                "login_history_id = EXCLUDED.login_history_id, created_at = EXCLUDED.created_at",
                (binding.session_id, binding.user_id, binding.login_session_id, binding.created_at),
            )

    async def lookup(self, session_id: str) -> SessionBinding | None:
        async with self._pool.connection() as conn:
            cur = await conn.execute(
                f"SELECT {_COLUMNS} FROM session_binding WHERE session_id = %s",
                (session_id,),
            )
            r = await cur.fetchone()
        return _row_to_binding(r) if r else None

    async def release(self, session_id: str) -> SessionBinding | None:
        async with self._pool.connection() as conn:
            cur = await conn.execute(
                f"DELETE FROM session_binding WHERE session_id = %s RETURNING {_COLUMNS}",
                (session_id,),
            )
            r = await cur.fetchone()
        return _row_to_binding(r) if r else None


def _row_to_binding(r: tuple) -> SessionBinding:
    return SessionBinding(
        session_id=r[0],
        user_id=r[1],
        login_session_id=r[2],
        created_at=r[3],
    )
