"""Capability domains that permissions are scoped to."""

from enum import StrEnum


class Resource(StrEnum):
    """Closed set of permission resources."""

    DASHBOARD = "dashboard"
    TRUCKS = "trucks"
    MAINTENANCE = "maintenance"
    MECHANICS = "mechanics"
    REPORTS = "reports"
    USERS = "users"
    SETTINGS = "settings"
    ADMIN = "admin"
