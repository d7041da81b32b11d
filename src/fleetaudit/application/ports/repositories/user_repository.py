"""User repository port."""

from collections.abc import Iterable
from typing import Protocol

from fleetaudit.domain.entities import Actor


class UserRepository(Protocol):
    """Port for reading the current profile of a user."""

    async def get_by_id(self, user_id: str) -> Actor | None: ...

    async def get_many(self, user_ids: Iterable[str]) -> dict[str, Actor]: ...
