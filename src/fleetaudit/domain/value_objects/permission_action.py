"""Permission actions evaluated against a resource."""

from enum import StrEnum


class PermissionAction(StrEnum):
    """Operation classes for RBAC."""

    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
