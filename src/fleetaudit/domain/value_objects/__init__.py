"""Domain value objects."""

from fleetaudit.domain.value_objects.activity_action import AUDITED_ACTIONS, ActivityAction
from fleetaudit.domain.value_objects.permission_action import PermissionAction
from fleetaudit.domain.value_objects.resource import Resource
from fleetaudit.domain.value_objects.role import Role

__all__ = [
    "AUDITED_ACTIONS",
    "ActivityAction",
    "PermissionAction",
    "Resource",
    "Role",
]
