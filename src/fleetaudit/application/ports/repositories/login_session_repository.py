"""Login session repository port."""

from typing import Protocol
from uuid import UUID

from fleetaudit.application.dto.queries import LoginHistoryQuery
from fleetaudit.domain.entities import LoginSession


class LoginSessionRepository(Protocol):
    """Port for login history persistence."""

    async def get_by_id(self, login_session_id: UUID) -> LoginSession | None: ...

    async def create(self, login_session: LoginSession) -> LoginSession: ...

    async def update(self, login_session: LoginSession) -> None: ...

    async def list(self, query: LoginHistoryQuery) -> tuple[list[LoginSession], int]: ...
