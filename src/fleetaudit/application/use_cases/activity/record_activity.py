"""Record activity use case.

Recording is best-effort: it is never part of the caller's transaction and
never raises. A failed write is logged and dropped so that the business
operation that triggered it still succeeds.
"""

import asyncio
import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from fleetaudit.application.dto.request_meta import RequestMeta
from fleetaudit.domain.changes import change_record
from fleetaudit.domain.entities import ActivityEntry, AuditEntry
from fleetaudit.domain.value_objects import ActivityAction

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ActivityRecorder:
    """Persist activity entries and, for entity changes, parallel audit entries."""

    def __init__(
        self,
        unit_of_work_factory: type,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock
        self._in_flight: set[asyncio.Task] = set()

    async def record(
        self,
        user_id: str,
        action: ActivityAction,
        entity_type: str,
        entity_id: str | None = None,
        entity_name: str | None = None,
        before: Mapping[str, Any] | None = None,
        after: Mapping[str, Any] | None = None,
        request_meta: RequestMeta | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> ActivityEntry | None:
        """Record one activity; CREATE/UPDATE/DELETE with an entity id is also audited.

        Returns the activity entry, or None if it could not be written.
        The write is shielded so a cancelled caller does not abort it.
        """
        task = asyncio.ensure_future(
            self._record(
                user_id,
                action,
                entity_type,
                entity_id,
                entity_name,
                before,
                after,
                request_meta or RequestMeta(),
                metadata,
            )
        )
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return await asyncio.shield(task)

    async def record_entity_change(
        self,
        action: ActivityAction,
        entity_type: str,
        entity_id: str,
        user_id: str,
        before: Mapping[str, Any] | None = None,
        after: Mapping[str, Any] | None = None,
        request_meta: RequestMeta | None = None,
    ) -> ActivityEntry | None:
        """Record a create, update or delete of a domain entity."""
        return await self.record(
            user_id,
            action,
            entity_type,
            entity_id=entity_id,
            before=before,
            after=after,
            request_meta=request_meta,
        )

    async def _record(
        self,
        user_id: str,
        action: ActivityAction,
        entity_type: str,
        entity_id: str | None,
        entity_name: str | None,
        before: Mapping[str, Any] | None,
        after: Mapping[str, Any] | None,
        request_meta: RequestMeta,
        metadata: dict[str, Any] | None,
    ) -> ActivityEntry | None:
        try:
            action = ActivityAction(action)
        except ValueError:
            logger.error("Not recording unknown activity action %r", action)
            return None

        if action.is_audited and entity_id is not None:
            await self._write_audit(user_id, action, entity_type, entity_id, before, after, request_meta)
            entity_name = entity_name or f"{entity_type} {action.value.lower()}"
            metadata = {**(metadata or {}), "auditLog": True}

        try:
            entry = ActivityEntry(
                id=uuid4(),
                user_id=user_id,
                action=action,
                entity_type=entity_type,
                entity_id=entity_id,
                entity_name=entity_name,
                old_values=dict(before) if before is not None else None,
                new_values=dict(after) if after is not None else None,
                ip_address=request_meta.ip_address,
                user_agent=request_meta.user_agent,
                metadata=metadata,
                created_at=self._clock(),
            )
            async with self._uow_factory() as uow:
                await uow.activities.create(entry)
            return entry
        except Exception:
            logger.exception(
                "Failed to log user activity %s on %s for user %s", action, entity_type, user_id
            )
            return None

    async def _write_audit(
        self,
        user_id: str,
        action: ActivityAction,
        entity_type: str,
        entity_id: str,
        before: Mapping[str, Any] | None,
        after: Mapping[str, Any] | None,
        request_meta: RequestMeta,
    ) -> AuditEntry | None:
        try:
            async with self._uow_factory() as uow:
                # Current profile, not historical: later renames only affect later entries.
                actor = await uow.users.get_by_id(user_id)
                entry = AuditEntry(
                    id=uuid4(),
                    action=action,
                    entity_type=entity_type,
                    entity_id=entity_id,
                    user_id=user_id,
                    user_name=actor.name if actor else None,
                    user_email=actor.email if actor else None,
                    user_role=actor.role.value if actor else None,
                    changes=change_record(action, before, after),
                    ip_address=request_meta.ip_address,
                    user_agent=request_meta.user_agent,
                    created_at=self._clock(),
                )
                await uow.audit_logs.create(entry)
            return entry
        except Exception:
            logger.exception(
                "Failed to log audit event %s on %s %s", action, entity_type, entity_id
            )
            return None
