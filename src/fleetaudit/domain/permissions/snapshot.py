"""Point-in-time permission settings."""

from dataclasses import dataclass, field

from fleetaudit.domain.permissions.matrix import PermissionMatrix, PermissionPatch
from fleetaudit.domain.value_objects import Role


@dataclass(frozen=True)
class SettingsSnapshot:
    """Role overrides (full replacements) and user overrides (partial patches)."""

    role_overrides: dict[Role, PermissionMatrix] = field(default_factory=dict)
    user_overrides: dict[str, PermissionPatch] = field(default_factory=dict)


EMPTY_SNAPSHOT = SettingsSnapshot()
