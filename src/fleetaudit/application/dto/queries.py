"""Query DTOs for reading audit, activity and login history."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, TypeVar

from fleetaudit.domain.entities import Actor
from fleetaudit.domain.value_objects import ActivityAction

DEFAULT_LIMIT = 50
MAX_LIMIT = 500

T = TypeVar("T")


@dataclass(frozen=True)
class _PageParams:
    limit: int = DEFAULT_LIMIT
    offset: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "limit", min(max(self.limit, 1), MAX_LIMIT))
        object.__setattr__(self, "offset", max(self.offset, 0))


@dataclass(frozen=True)
class AuditLogQuery(_PageParams):
    """Filters for audit entries. Date bounds are inclusive."""

    user_id: str | None = None
    action: ActivityAction | None = None
    entity_type: str | None = None
    entity_id: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


@dataclass(frozen=True)
class ActivityQuery(_PageParams):
    """Filters for activity entries."""

    user_id: str | None = None
    action: ActivityAction | None = None
    entity_type: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


@dataclass(frozen=True)
class LoginHistoryQuery(_PageParams):
    """Filters for login sessions."""

    user_id: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    is_active: bool | None = None


@dataclass
class Page(Generic[T]):
    """One page of results, newest first, with the unpaged total.

    ``users`` holds the current profile of each user the items refer to,
    where the listing resolves them.
    """

    items: list[T] = field(default_factory=list)
    total: int = 0
    users: dict[str, Actor] = field(default_factory=dict)
