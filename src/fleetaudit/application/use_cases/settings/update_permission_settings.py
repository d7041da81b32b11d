"""Update permission settings use case."""

import logging
from collections.abc import Mapping
from typing import Any

from fleetaudit.application.dto.permission_settings import (
    PermissionSettings,
    permission_settings_from_stored,
)
from fleetaudit.application.dto.request_meta import RequestMeta
from fleetaudit.application.ports import PermissionChecker
from fleetaudit.application.use_cases.activity.record_activity import ActivityRecorder
from fleetaudit.domain.exceptions import PermissionDenied, ValidationError
from fleetaudit.domain.permissions.normalize import parse_matrix, parse_patch
from fleetaudit.domain.value_objects import ActivityAction, PermissionAction, Resource, Role

logger = logging.getLogger(__name__)

SETTINGS_ENTITY_TYPE = "Settings"
PERMISSIONS_ENTITY_ID = "permissions"


def _validated_roles(raw: object) -> dict[str, Any]:
    if not isinstance(raw, Mapping):
        raise ValidationError("role_permissions must be an object keyed by role")
    for name, value in raw.items():
        try:
            Role(name)
        except ValueError:
            raise ValidationError(f"Unknown role: {name!r}") from None
        if parse_matrix(value) is None:
            raise ValidationError(f"Unrecognized permissions for role {name}")
    return dict(raw)


def _validated_users(raw: object) -> dict[str, Any]:
    if not isinstance(raw, Mapping):
        raise ValidationError("user_permissions must be an object keyed by user id")
    for user_id, value in raw.items():
        if parse_patch(value) is None:
            raise ValidationError(f"Unrecognized permissions for user {user_id}")
    return {str(k): v for k, v in raw.items()}


class UpdatePermissionSettingsUseCase:
    """Replace role and/or user permission overrides. Requires settings update.

    A part that is not supplied keeps its stored value. Values are stored
    in the shape they were given, once they normalize. The change is
    audited against the ``Settings`` entity.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        activity_recorder: ActivityRecorder,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._recorder = activity_recorder

    async def execute(
        self,
        user_id: str,
        role_permissions: object = None,
        user_permissions: object = None,
        request_meta: RequestMeta | None = None,
    ) -> PermissionSettings:
        can_update = await self._permission_checker.check(
            user_id, Resource.SETTINGS, PermissionAction.UPDATE
        )
        if not can_update:
            raise PermissionDenied("User cannot update settings")
        if role_permissions is None and user_permissions is None:
            raise ValidationError("Nothing to update: give role_permissions or user_permissions")

        roles = _validated_roles(role_permissions) if role_permissions is not None else None
        users = _validated_users(user_permissions) if user_permissions is not None else None

        async with self._uow_factory() as uow:
            before = await uow.settings.get_permissions() or {}
            after = {
                "rolePermissions": roles if roles is not None else before.get("rolePermissions") or {},
                "userPermissions": users if users is not None else before.get("userPermissions") or {},
            }
            await uow.settings.save_permissions(after["rolePermissions"], after["userPermissions"])
        logger.info("User %s updated permission settings", user_id)

        await self._recorder.record_entity_change(
            ActivityAction.UPDATE,
            SETTINGS_ENTITY_TYPE,
            PERMISSIONS_ENTITY_ID,
            user_id,
            before=before,
            after=after,
            request_meta=request_meta,
        )
        return permission_settings_from_stored(after)
