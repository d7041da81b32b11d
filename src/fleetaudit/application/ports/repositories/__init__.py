"""Repository ports."""

from fleetaudit.application.ports.repositories.activity_repository import (
    ActivityRepository,
)
from fleetaudit.application.ports.repositories.audit_log_repository import (
    AuditLogRepository,
)
from fleetaudit.application.ports.repositories.login_session_repository import (
    LoginSessionRepository,
)
from fleetaudit.application.ports.repositories.settings_repository import (
    SettingsRepository,
)
from fleetaudit.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "ActivityRepository",
    "AuditLogRepository",
    "LoginSessionRepository",
    "SettingsRepository",
    "UserRepository",
]
