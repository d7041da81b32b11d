"""Permission settings DTO."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from fleetaudit.domain.permissions.matrix import PermissionMatrix
from fleetaudit.domain.permissions.normalize import load_settings_snapshot
from fleetaudit.domain.permissions.resolver import resolve_role_matrix
from fleetaudit.domain.value_objects import Role


@dataclass(frozen=True)
class PermissionSettings:
    """Role matrices in force (override or default) and the stored user overrides."""

    role_matrices: dict[Role, PermissionMatrix]
    user_permissions: dict[str, Any] = field(default_factory=dict)


def permission_settings_from_stored(raw: Mapping[str, Any] | None) -> PermissionSettings:
    snapshot = load_settings_snapshot(raw)
    users = raw.get("userPermissions") if raw else None
    return PermissionSettings(
        role_matrices={role: resolve_role_matrix(role, snapshot) for role in Role},
        user_permissions=dict(users) if isinstance(users, Mapping) else {},
    )
