"""PostgreSQL audit log repository implementation."""

from psycopg import AsyncConnection

from fleetaudit.application.dto.queries import AuditLogQuery
from fleetaudit.domain.entities import AuditEntry
from fleetaudit.domain.value_objects import ActivityAction
from fleetaudit.infrastructure.persistence.postgres.filters import build_where, to_jsonb

_COLUMNS = (
    "id, action, entity_type, entity_id, user_id, user_name, user_email, user_role, "
    "changes, ip_address, user_agent, created_at"
)


def _row_to_entry(r: tuple) -> AuditEntry:
    return AuditEntry(
        id=r[0],
        action=ActivityAction(r[1]),
        entity_type=r[2],
        entity_id=r[3],
        user_id=r[4],
        user_name=r[5],
        user_email=r[6],
        user_role=r[7],
        changes=r[8],
        ip_address=r[9],
        user_agent=r[10],
        created_at=r[11],
    )


class PostgresAuditLogRepository:
    """Audit log repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def create(self, entry: AuditEntry) -> AuditEntry:
        """Append audit entry."""
        await self._conn.execute(
            f"INSERT INTO audit_log ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                entry.id,
                entry.action.value,
                entry.entity_type,
                entry.entity_id,
                entry.user_id,
                entry.user_name,
                entry.user_email,
                entry.user_role,
                to_jsonb(entry.changes),
                entry.ip_address,
                entry.user_agent,
                entry.created_at,
            ),
        )
        return entry

    async def list(self, query: AuditLogQuery) -> tuple[list[AuditEntry], int]:
        """List audit entries newest first, with total count."""
        where, params = build_where(
            {
                "user_id": query.user_id,
                "action": query.action.value if query.action else None,
                "entity_type": query.entity_type,
                "entity_id": query.entity_id,
            },
            time_column="created_at",
            start=query.start_date,
            end=query.end_date,
        )
        cur = await self._conn.execute(f"SELECT count(*) FROM audit_log{where}", tuple(params))
        total = (await cur.fetchone())[0]
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM audit_log{where} ORDER BY created_at DESC LIMIT %s OFFSET %s",
            (*params, query.limit, query.offset),
        )
        rows = await cur.fetchall()
        return [_row_to_entry(r) for r in rows], total
