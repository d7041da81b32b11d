"""Get permission settings use case."""

from fleetaudit.application.dto.permission_settings import (
    PermissionSettings,
    permission_settings_from_stored,
)
from fleetaudit.application.ports import PermissionChecker
from fleetaudit.domain.exceptions import PermissionDenied
from fleetaudit.domain.value_objects import PermissionAction, Resource


class GetPermissionSettingsUseCase:
    """Read role and user permission overrides. Requires settings read.

    Roles without a stored override report their built-in default.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, user_id: str) -> PermissionSettings:
        can_read = await self._permission_checker.check(
            user_id, Resource.SETTINGS, PermissionAction.READ
        )
        if not can_read:
            raise PermissionDenied("User cannot view settings")

        async with self._uow_factory() as uow:
            raw = await uow.settings.get_permissions()
        return permission_settings_from_stored(raw)
