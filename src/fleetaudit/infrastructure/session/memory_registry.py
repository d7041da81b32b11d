"""In-process session registry.

Not shared across processes; suitable for a single worker and for tests.
"""

import asyncio

from fleetaudit.domain.entities import SessionBinding


class InMemorySessionRegistry:
    """Lock-guarded dict of session id -> binding."""

    def __init__(self) -> None:
        self._bindings: dict[str, SessionBinding] = {}
        self._lock = asyncio.Lock()

    async def bind(self, binding: SessionBinding) -> None:
        async with self._lock:
            self._bindings[binding.session_id] = binding

    async def lookup(self, session_id: str) -> SessionBinding | None:
        async with self._lock:
            return self._bindings.get(session_id)

    async def release(self, session_id: str) -> SessionBinding | None:
        async with self._lock:
            return self._bindings.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._bindings)
