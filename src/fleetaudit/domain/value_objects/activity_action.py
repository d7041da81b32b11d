"""Actions recorded in the activity and audit trails."""

from enum import StrEnum


class ActivityAction(StrEnum):
    """Behavioral actions; CREATE, UPDATE and DELETE are also audited."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    VIEW = "VIEW"
    EXPORT = "EXPORT"
    IMPORT = "IMPORT"

    @property
    def is_audited(self) -> bool:
        """True for structural changes that also produce an audit entry."""
        return self in AUDITED_ACTIONS


AUDITED_ACTIONS = frozenset(
    {ActivityAction.CREATE, ActivityAction.UPDATE, ActivityAction.DELETE}
)
