"""Actor entity - the current user as seen by the core."""

from dataclasses import dataclass

from fleetaudit.domain.permissions.matrix import PermissionPatch
from fleetaudit.domain.value_objects import Role


@dataclass
class Actor:
    """User identity, role and optional per-user permission override."""

    id: str
    role: Role
    name: str | None = None
    email: str | None = None
    permissions: PermissionPatch | None = None
