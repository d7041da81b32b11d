"""PostgreSQL user repository implementation."""

from collections.abc import Iterable

from psycopg import AsyncConnection

from fleetaudit.domain.entities import Actor
from fleetaudit.domain.permissions.normalize import parse_patch
from fleetaudit.domain.value_objects import Role

_COLUMNS = "id, name, email, role, permissions"


def _row_to_actor(r: tuple) -> Actor:
    return Actor(
        id=r[0],
        name=r[1],
        email=r[2],
        role=Role.parse(r[3]),
        permissions=parse_patch(r[4]),
    )


class PostgresUserRepository:
    """User repository implementation (read-only view of app_user)."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: str) -> Actor | None:
        """Get current user profile by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM app_user WHERE id = %s",
            (user_id,),
        )
        r = await cur.fetchone()
        return _row_to_actor(r) if r else None

    async def get_many(self, user_ids: Iterable[str]) -> dict[str, Actor]:
        """Profiles keyed by id; unknown ids are absent."""
        ids = sorted(set(user_ids))
        if not ids:
            return {}
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM app_user WHERE id = ANY(%s)",
            (ids,),
        )
        return {r[0]: _row_to_actor(r) for r in await cur.fetchall()}
