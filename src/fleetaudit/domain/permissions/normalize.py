"""Load-boundary adapter for stored permission data.

Stored permissions come in two shapes: a flat object of boolean flags
(``{"canViewTrucks": true, ...}``) and a list of resource entries
(``[{"resource": "trucks", "actions": ["read"]}, ...]``). Both are
normalized here; nothing past this module looks at the raw shape.
"""

import logging
from collections.abc import Mapping, Sequence

from fleetaudit.domain.permissions.matrix import PermissionMatrix, PermissionPatch
from fleetaudit.domain.permissions.snapshot import SettingsSnapshot
from fleetaudit.domain.permissions.vocabulary import FLAG_GRANTS, MODELED_ACTIONS, Grant
from fleetaudit.domain.value_objects import PermissionAction, Resource, Role

logger = logging.getLogger(__name__)


def _is_entry_list(raw: object) -> bool:
    return isinstance(raw, Sequence) and not isinstance(raw, (str, bytes))


def _flag_assignments(raw: Mapping) -> dict[Grant, bool]:
    assignments: dict[Grant, bool] = {}
    for flag, grants in FLAG_GRANTS.items():
        value = raw.get(flag)
        if isinstance(value, bool):
            for grant in grants:
                assignments[grant] = value
    return assignments


def _entry_assignments(raw: Sequence) -> dict[Grant, bool]:
    """Every modeled action of a listed resource is assigned; unlisted resources are not."""
    allowed: dict[Resource, set[PermissionAction]] = {}
    for entry in raw:
        if not isinstance(entry, Mapping):
            logger.warning("Skipping malformed permission entry: %r", entry)
            continue
        try:
            resource = Resource(entry.get("resource"))
        except ValueError:
            logger.warning("Skipping permission entry for unknown resource: %r", entry.get("resource"))
            continue
        actions = entry.get("actions") or []
        if not _is_entry_list(actions):
            logger.warning("Skipping permission entry with malformed actions: %r", entry)
            continue
        bucket = allowed.setdefault(resource, set())
        for name in actions:
            if name == "export":
                # export follows read
                name = PermissionAction.READ.value
            try:
                action = PermissionAction(name)
            except ValueError:
                continue
            if action in MODELED_ACTIONS[resource]:
                bucket.add(action)

    return {
        (resource, action): action in granted
        for resource, granted in allowed.items()
        for action in MODELED_ACTIONS[resource]
    }


def parse_patch(raw: object) -> PermissionPatch | None:
    """Partial patch from either shape. None when the shape is unrecognized."""
    if raw is None:
        return None
    if isinstance(raw, Mapping):
        return PermissionPatch(_flag_assignments(raw))
    if _is_entry_list(raw):
        return PermissionPatch(_entry_assignments(raw))
    logger.warning("Ignoring permission override of unrecognized shape: %s", type(raw).__name__)
    return None


def parse_matrix(raw: object) -> PermissionMatrix | None:
    """Full matrix from either shape; unspecified pairs deny. None when unrecognized."""
    patch = parse_patch(raw)
    if patch is None:
        return None
    return PermissionMatrix().patched(patch)


def load_settings_snapshot(raw: object) -> SettingsSnapshot:
    """Build a SettingsSnapshot from a stored settings record.

    Expects ``{"rolePermissions": {...}, "userPermissions": {...}}``. Any
    part that is missing or malformed is dropped, so resolution falls back
    to the built-in role defaults for it.
    """
    if not isinstance(raw, Mapping):
        if raw is not None:
            logger.warning("Ignoring settings snapshot of unrecognized shape: %s", type(raw).__name__)
        return SettingsSnapshot()

    role_overrides: dict[Role, PermissionMatrix] = {}
    raw_roles = raw.get("rolePermissions")
    if isinstance(raw_roles, Mapping):
        for name, value in raw_roles.items():
            try:
                role = Role(name)
            except ValueError:
                logger.warning("Ignoring permission override for unknown role: %r", name)
                continue
            matrix = parse_matrix(value)
            if matrix is not None:
                role_overrides[role] = matrix

    user_overrides: dict[str, PermissionPatch] = {}
    raw_users = raw.get("userPermissions")
    if isinstance(raw_users, Mapping):
        for user_id, value in raw_users.items():
            patch = parse_patch(value)
            if patch is not None:
                user_overrides[str(user_id)] = patch

    return SettingsSnapshot(role_overrides=role_overrides, user_overrides=user_overrides)
