"""Compiled-in role permission templates."""

from types import MappingProxyType

from fleetaudit.domain.permissions.matrix import PermissionMatrix
from fleetaudit.domain.permissions.vocabulary import FLAG_GRANTS
from fleetaudit.domain.value_objects import Role


def _from_true_flags(*flags: str) -> PermissionMatrix:
    return PermissionMatrix.from_grants(g for flag in flags for g in FLAG_GRANTS[flag])


ADMIN_MATRIX = _from_true_flags(*FLAG_GRANTS)

MANAGER_MATRIX = _from_true_flags(
    "canViewDashboard",
    "canViewTrucks",
    "canAddTrucks",
    "canEditTrucks",
    "canViewMaintenance",
    "canAddMaintenance",
    "canEditMaintenance",
    "canViewMechanics",
    "canAddMechanics",
    "canEditMechanics",
    "canViewReports",
    "canViewUsers",
    "canViewSettings",
)

USER_MATRIX = _from_true_flags(
    "canViewDashboard",
    "canViewTrucks",
    "canViewMaintenance",
    "canViewMechanics",
)

ROLE_DEFAULTS: MappingProxyType[Role, PermissionMatrix] = MappingProxyType({
    Role.ADMIN: ADMIN_MATRIX,
    Role.MANAGER: MANAGER_MATRIX,
    Role.USER: USER_MATRIX,
})


def default_matrix(role: Role) -> PermissionMatrix:
    """Built-in matrix for role."""
    return ROLE_DEFAULTS[role]
