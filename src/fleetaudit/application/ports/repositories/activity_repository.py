"""Activity repository port."""

from typing import Protocol

from fleetaudit.application.dto.queries import ActivityQuery
from fleetaudit.domain.entities import ActivityEntry


class ActivityRepository(Protocol):
    """Port for append-only activity persistence."""

    async def create(self, entry: ActivityEntry) -> ActivityEntry: ...

    async def list(self, query: ActivityQuery) -> tuple[list[ActivityEntry], int]: ...
