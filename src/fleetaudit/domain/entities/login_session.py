"""Login session - span between authentication and logout."""

import math
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


def session_duration(login_time: datetime, logout_time: datetime) -> int:
    """Whole seconds between login and logout, floored and never negative."""
    seconds = (logout_time - login_time).total_seconds()
    return max(0, math.floor(seconds))


@dataclass
class LoginSession:
    """Login history record. Open sessions may stay active forever."""

    id: UUID
    user_id: str
    login_time: datetime
    ip_address: str | None = None
    user_agent: str | None = None
    is_active: bool = True
    logout_time: datetime | None = None
    session_duration: int | None = None

    def close(self, logout_time: datetime) -> int:
        """Mark the session closed and return its duration in seconds."""
        duration = session_duration(self.login_time, logout_time)
        self.logout_time = logout_time
        self.session_duration = duration
        self.is_active = False
        return duration
