"""User roles."""

from enum import StrEnum


class Role(StrEnum):
    """Roles with a compiled-in default permission matrix."""

    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    USER = "USER"

    @classmethod
    def parse(cls, value: str | None) -> "Role":
        """Map a stored role string to a Role; unknown roles get USER defaults."""
        try:
            return cls(value)
        except ValueError:
            return cls.USER
