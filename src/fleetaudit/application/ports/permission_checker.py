"""Permission checker port - RBAC authorization."""

from typing import Protocol

from fleetaudit.domain.value_objects import PermissionAction, Resource


class PermissionChecker(Protocol):
    """Port for checking whether a user may perform an action on a resource."""

    async def check(self, user_id: str, resource: Resource, action: PermissionAction) -> bool: ...
