"""Activity entry - behavioral log including non-mutating actions."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from fleetaudit.domain.value_objects import ActivityAction


@dataclass(frozen=True)
class ActivityEntry:
    """Immutable activity record."""

    id: UUID
    user_id: str
    action: ActivityAction
    entity_type: str
    created_at: datetime
    entity_id: str | None = None
    entity_name: str | None = None
    old_values: Any = None
    new_values: Any = None
    ip_address: str | None = None
    user_agent: str | None = None
    metadata: dict[str, Any] | None = None
