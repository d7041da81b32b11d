"""Audit log repository port."""

from typing import Protocol

from fleetaudit.application.dto.queries import AuditLogQuery
from fleetaudit.domain.entities import AuditEntry


class AuditLogRepository(Protocol):
    """Port for append-only audit persistence."""

    async def create(self, entry: AuditEntry) -> AuditEntry: ...

    async def list(self, query: AuditLogQuery) -> tuple[list[AuditEntry], int]: ...
