"""Permission checker implementation - resolves against the settings snapshot."""

from fleetaudit.domain.permissions.resolver import resolve
from fleetaudit.domain.value_objects import PermissionAction, Resource


class SettingsPermissionChecker:
    """Checks a user's effective matrix: user override, role override, role default."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def check(self, user_id: str, resource: Resource, action: PermissionAction) -> bool:
        """Check if user may perform action on resource. Unknown users are denied."""
        async with self._uow_factory() as uow:
            actor = await uow.users.get_by_id(user_id)
            if not actor:
                return False
            snapshot = await uow.settings.get_permission_snapshot()

        matrix = resolve(actor.role, actor.id, actor.permissions, snapshot)
        return matrix.allows(resource, action)
