"""Session binding - browsing session id to login history record."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class SessionBinding:
    """What a session cookie points at."""

    session_id: str
    user_id: str
    login_session_id: UUID
    created_at: datetime
