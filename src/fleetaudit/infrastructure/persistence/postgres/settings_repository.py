"""PostgreSQL settings repository implementation."""

from typing import Any

from psycopg import AsyncConnection

from fleetaudit.domain.permissions.normalize import load_settings_snapshot
from fleetaudit.domain.permissions.snapshot import SettingsSnapshot
from fleetaudit.infrastructure.persistence.postgres.filters import to_jsonb


class PostgresSettingsRepository:
    """Settings repository implementation. There is at most one settings row."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_permissions(self) -> dict[str, Any] | None:
        cur = await self._conn.execute(
            "SELECT role_permissions, user_permissions FROM settings ORDER BY id LIMIT 1"
        )
        r = await cur.fetchone()
        if not r:
            return None
        return {"rolePermissions": r[0], "userPermissions": r[1]}

    async def get_permission_snapshot(self) -> SettingsSnapshot:
        """Load role and user permission overrides, normalized."""
        return load_settings_snapshot(await self.get_permissions())

    async def save_permissions(
        self,
        role_permissions: dict[str, Any],
        user_permissions: dict[str, Any],
    ) -> None:
        """Update the settings row, creating it on first save."""
        cur = await self._conn.execute(
            """
            UPDATE settings
            SET role_permissions = %s, user_permissions = %s, updated_at = now()
            WHERE id = (SELECT id FROM settings ORDER BY id LIMIT 1)
            """,
            (to_jsonb(role_permissions), to_jsonb(user_permissions)),
        )
        if cur.rowcount == 0:
            await self._conn.execute(
                "INSERT INTO settings (role_permissions, user_permissions) VALUES (%s, %s)",
                (to_jsonb(role_permissions), to_jsonb(user_permissions)),
            )
