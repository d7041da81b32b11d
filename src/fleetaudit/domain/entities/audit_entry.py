"""Audit entry - structural change to a domain entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from fleetaudit.domain.value_objects import ActivityAction


@dataclass(frozen=True)
class AuditEntry:
    """Immutable audit record; actor fields are denormalized at write time."""

    id: UUID
    action: ActivityAction
    entity_type: str
    entity_id: str
    user_id: str
    created_at: datetime
    user_name: str | None = None
    user_email: str | None = None
    user_role: str | None = None
    changes: dict[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None
