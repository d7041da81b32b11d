"""Session registry port - externally owned session id store."""

from typing import Protocol

from fleetaudit.domain.entities import SessionBinding


class SessionRegistry(Protocol):
    """Maps browsing session ids to login history records.

    Implementations must tolerate concurrent bind/lookup/release from
    unrelated requests.
    """

    async def bind(self, binding: SessionBinding) -> None: ...

    async def lookup(self, session_id: str) -> SessionBinding | None: ...

    async def release(self, session_id: str) -> SessionBinding | None: ...
