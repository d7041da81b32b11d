"""PostgreSQL activity repository implementation."""

from psycopg import AsyncConnection

from fleetaudit.application.dto.queries import ActivityQuery
from fleetaudit.domain.entities import ActivityEntry
from fleetaudit.domain.value_objects import ActivityAction
from fleetaudit.infrastructure.persistence.postgres.filters import build_where, to_jsonb

_COLUMNS = (
    "id, user_id, action, entity_type, entity_id, entity_name, old_values, new_values, "
    "ip_address, user_agent, metadata, created_at"
)


def _row_to_entry(r: tuple) -> ActivityEntry:
    return ActivityEntry(
        id=r[0],
        user_id=r[1],
        action=ActivityAction(r[2]),
        entity_type=r[3],
        entity_id=r[4],
        entity_name=r[5],
        old_values=r[6],
        new_values=r[7],
        ip_address=r[8],
        user_agent=r[9],
        metadata=r[10],
        created_at=r[11],
    )


class PostgresActivityRepository:
    """Activity repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def create(self, entry: ActivityEntry) -> ActivityEntry:
        """Append activity entry."""
        await self._conn.execute(
            f"INSERT INTO user_activity ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                entry.id,
                entry.user_id,
                entry.action.value,
                entry.entity_type,
                entry.entity_id,
                entry.entity_name,
                to_jsonb(entry.old_values),
                to_jsonb(entry.new_values),
                entry.ip_address,
                entry.user_agent,
                to_jsonb(entry.metadata),
                entry.created_at,
            ),
        )
        return entry

    async def list(self, query: ActivityQuery) -> tuple[list[ActivityEntry], int]:
        """List activity newest first, with total count."""
        where, params = build_where(
            {
                "user_id": query.user_id,
                "action": query.action.value if query.action else None,
                "entity_type": query.entity_type,
            },
            time_column="created_at",
            start=query.start_date,
            end=query.end_date,
        )
        cur = await self._conn.execute(f"SELECT count(*) FROM user_activity{where}", tuple(params))
        total = (await cur.fetchone())[0]
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM user_activity{where} ORDER BY created_at DESC LIMIT %s OFFSET %s",
            (*params, query.limit, query.offset),
        )
        rows = await cur.fetchall()
        return [_row_to_entry(r) for r in rows], total
