"""Get effective permissions use case."""

from fleetaudit.domain.exceptions import NotFound
from fleetaudit.domain.permissions.resolver import EffectivePermissions


class GetEffectivePermissionsUseCase:
    """Resolve the current user's permissions against the settings snapshot."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, user_id: str) -> EffectivePermissions:
        """Load actor and settings, then resolve."""
        async with self._uow_factory() as uow:
            actor = await uow.users.get_by_id(user_id)
            if not actor:
                raise NotFound(f"User {user_id} not found")
            snapshot = await uow.settings.get_permission_snapshot()
        return EffectivePermissions.for_actor(actor, snapshot)
