"""Permission resolution.

Precedence, highest first:

1. a user override (settings entry for the user id, else the raw override
   stored on the user) patched onto the role-level matrix;
2. the role override from settings, used verbatim;
3. the built-in default matrix for the role.

Resolution is pure and safe to call concurrently.
"""

from fleetaudit.domain.entities.actor import Actor
from fleetaudit.domain.permissions.defaults import default_matrix
from fleetaudit.domain.permissions.matrix import PermissionMatrix, PermissionPatch
from fleetaudit.domain.permissions.normalize import load_settings_snapshot, parse_patch
from fleetaudit.domain.permissions.snapshot import EMPTY_SNAPSHOT, SettingsSnapshot
from fleetaudit.domain.permissions.vocabulary import PAGE_RESOURCES
from fleetaudit.domain.value_objects import PermissionAction, Resource, Role


def resolve_role_matrix(role: Role, snapshot: SettingsSnapshot) -> PermissionMatrix:
    """Role override if present, else the built-in default."""
    if role in snapshot.role_overrides:
        return snapshot.role_overrides[role]
    return default_matrix(role)


def resolve(
    role: Role,
    user_id: str,
    user_override: PermissionPatch | None = None,
    snapshot: SettingsSnapshot = EMPTY_SNAPSHOT,
) -> PermissionMatrix:
    """Compute the effective matrix for a user."""
    role_matrix = resolve_role_matrix(role, snapshot)
    patch = snapshot.user_overrides.get(user_id, user_override)
    if patch is None:
        return role_matrix
    return role_matrix.patched(patch)


def resolve_raw(
    role: str | None,
    user_id: str,
    raw_user_override: object = None,
    raw_settings: object = None,
) -> PermissionMatrix:
    """Resolve straight from stored data in either shape."""
    return resolve(
        Role.parse(role),
        user_id,
        parse_patch(raw_user_override),
        load_settings_snapshot(raw_settings),
    )


class EffectivePermissions:
    """Point queries against a resolved matrix. Unknown names deny, never raise."""

    def __init__(self, role: Role, matrix: PermissionMatrix) -> None:
        self.role = role
        self.matrix = matrix

    @classmethod
    def for_actor(
        cls, actor: Actor, snapshot: SettingsSnapshot = EMPTY_SNAPSHOT
    ) -> "EffectivePermissions":
        return cls(actor.role, resolve(actor.role, actor.id, actor.permissions, snapshot))

    def has_permission(self, resource: str, action: str) -> bool:
        try:
            return self.matrix.allows(Resource(resource), PermissionAction(action))
        except ValueError:
            return False

    def can_access(self, resource: str) -> bool:
        return self.has_permission(resource, PermissionAction.READ)

    def can_create(self, resource: str) -> bool:
        return self.has_permission(resource, PermissionAction.CREATE)

    def can_update(self, resource: str) -> bool:
        return self.has_permission(resource, PermissionAction.UPDATE)

    def can_delete(self, resource: str) -> bool:
        return self.has_permission(resource, PermissionAction.DELETE)

    def can_export(self, resource: str) -> bool:
        # Export is not modeled separately.
        return self.has_permission(resource, PermissionAction.READ)

    def can_access_page(self, path: str) -> bool:
        resource = PAGE_RESOURCES.get(path)
        if resource is None:
            return False
        return self.matrix.allows(resource, PermissionAction.READ)
