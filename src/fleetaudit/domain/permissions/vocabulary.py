"""Permission flag vocabulary.

The stored flat shape is a set of ~20 boolean flags (``canViewTrucks``,
``canManageUsers``, ...). Each flag grants one or more (resource, action)
pairs; every modeled pair belongs to exactly one flag. Pairs not listed
here are unmodeled and always deny.
"""

from types import MappingProxyType

from fleetaudit.domain.value_objects import PermissionAction, Resource

Grant = tuple[Resource, PermissionAction]

_R = PermissionAction.READ
_C = PermissionAction.CREATE
_U = PermissionAction.UPDATE
_D = PermissionAction.DELETE

FLAG_GRANTS: MappingProxyType[str, tuple[Grant, ...]] = MappingProxyType({
    "canViewDashboard": ((Resource.DASHBOARD, _R),),
    "canViewTrucks": ((Resource.TRUCKS, _R),),
    "canAddTrucks": ((Resource.TRUCKS, _C),),
    "canEditTrucks": ((Resource.TRUCKS, _U),),
    "canDeleteTrucks": ((Resource.TRUCKS, _D),),
    "canViewMaintenance": ((Resource.MAINTENANCE, _R),),
    "canAddMaintenance": ((Resource.MAINTENANCE, _C),),
    "canEditMaintenance": ((Resource.MAINTENANCE, _U),),
    "canDeleteMaintenance": ((Resource.MAINTENANCE, _D),),
    "canViewMechanics": ((Resource.MECHANICS, _R),),
    "canAddMechanics": ((Resource.MECHANICS, _C),),
    "canEditMechanics": ((Resource.MECHANICS, _U),),
    "canDeleteMechanics": ((Resource.MECHANICS, _D),),
    "canViewReports": ((Resource.REPORTS, _R),),
    "canViewUsers": ((Resource.USERS, _R),),
    "canManageUsers": ((Resource.USERS, _C), (Resource.USERS, _U), (Resource.USERS, _D)),
    "canViewSettings": ((Resource.SETTINGS, _R),),
    "canManageSettings": ((Resource.SETTINGS, _U),),
    "canViewAdmin": ((Resource.ADMIN, _R),),
    "canManageAdmin": ((Resource.ADMIN, _U),),
})


def _modeled_actions() -> dict[Resource, frozenset[PermissionAction]]:
    actions: dict[Resource, set[PermissionAction]] = {r: set() for r in Resource}
    for grants in FLAG_GRANTS.values():
        for resource, action in grants:
            actions[resource].add(action)
    return {r: frozenset(a) for r, a in actions.items()}


MODELED_ACTIONS: MappingProxyType[Resource, frozenset[PermissionAction]] = MappingProxyType(
    _modeled_actions()
)

PAGE_RESOURCES: MappingProxyType[str, Resource] = MappingProxyType({
    "/": Resource.DASHBOARD,
    "/trucks": Resource.TRUCKS,
    "/maintenance": Resource.MAINTENANCE,
    "/mechanics": Resource.MECHANICS,
    "/reports": Resource.REPORTS,
    "/users": Resource.USERS,
    "/settings": Resource.SETTINGS,
    "/admin": Resource.ADMIN,
})


def is_modeled(resource: Resource, action: PermissionAction) -> bool:
    """Return True if (resource, action) is part of the permission model."""
    return action in MODELED_ACTIONS.get(resource, frozenset())
