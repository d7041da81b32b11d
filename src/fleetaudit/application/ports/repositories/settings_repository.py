"""Settings repository port."""

from typing import Any, Protocol

from fleetaudit.domain.permissions.snapshot import SettingsSnapshot


class SettingsRepository(Protocol):
    """Port for the administrator-editable permission settings."""

    async def get_permission_snapshot(self) -> SettingsSnapshot: ...

    async def get_permissions(self) -> dict[str, Any] | None:
        """Stored ``rolePermissions``/``userPermissions`` as saved, or None if never saved."""
        ...

    async def save_permissions(
        self,
        role_permissions: dict[str, Any],
        user_permissions: dict[str, Any],
    ) -> None: ...
