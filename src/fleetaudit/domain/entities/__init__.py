"""Domain entities."""

from fleetaudit.domain.entities.activity_entry import ActivityEntry
from fleetaudit.domain.entities.actor import Actor
from fleetaudit.domain.entities.audit_entry import AuditEntry
from fleetaudit.domain.entities.login_session import LoginSession, session_duration
from fleetaudit.domain.entities.session_binding import SessionBinding

__all__ = [
    "ActivityEntry",
    "Actor",
    "AuditEntry",
    "LoginSession",
    "SessionBinding",
    "session_duration",
]
