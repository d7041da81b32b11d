"""Session tracker use case - login session lifecycle.

no-session -> open (first authenticated request) -> closed (logout).
A session that is never closed stays open; that is a valid end state.
"""

import logging
import secrets
import string
from collections.abc import Callable
from datetime import UTC, datetime
from uuid import UUID, uuid4

from fleetaudit.application.dto.request_meta import RequestMeta
from fleetaudit.application.ports import SessionRegistry
from fleetaudit.application.use_cases.activity.record_activity import ActivityRecorder
from fleetaudit.domain.entities import LoginSession, SessionBinding
from fleetaudit.domain.value_objects import ActivityAction

logger = logging.getLogger(__name__)

SESSION_ENTITY_TYPE = "USER_SESSION"
_BASE36 = string.digits + string.ascii_lowercase


def _utcnow() -> datetime:
    return datetime.now(UTC)


def new_session_id(now: datetime) -> str:
    """Opaque session id: ``session_<epoch ms>_<9 base36 chars>``."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"session_{int(now.timestamp() * 1000)}_{suffix}"


class SessionTracker:
    """Open and close login sessions behind a SessionRegistry."""

    def __init__(
        self,
        unit_of_work_factory: type,
        session_registry: SessionRegistry,
        activity_recorder: ActivityRecorder,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._registry = session_registry
        self._recorder = activity_recorder
        self._clock = clock

    async def open(self, user_id: str, request_meta: RequestMeta | None = None) -> str:
        """Start a login session and return its new session id."""
        request_meta = request_meta or RequestMeta()
        now = self._clock()
        login_session = LoginSession(
            id=uuid4(),
            user_id=user_id,
            login_time=now,
            ip_address=request_meta.ip_address,
            user_agent=request_meta.user_agent,
        )
        async with self._uow_factory() as uow:
            await uow.login_sessions.create(login_session)

        await self._recorder.record(
            user_id,
            ActivityAction.LOGIN,
            SESSION_ENTITY_TYPE,
            entity_name="User Login",
            request_meta=request_meta,
            metadata={"loginHistoryId": str(login_session.id)},
        )

        session_id = new_session_id(now)
        await self._registry.bind(
            SessionBinding(
                session_id=session_id,
                user_id=user_id,
                login_session_id=login_session.id,
                created_at=now,
            )
        )
        logger.info("Opened session for user %s (login %s)", user_id, login_session.id)
        return session_id

    async def is_open(self, session_id: str) -> bool:
        return await self._registry.lookup(session_id) is not None

    async def session_for(self, user_id: str, session_id: str) -> SessionBinding | None:
        """The open binding for ``session_id`` if it belongs to ``user_id``, else None."""
        binding = await self._registry.lookup(session_id)
        if binding is None:
            return None
        if binding.user_id != user_id:
            logger.warning("Session %s is bound to another user; ignoring it for %s", session_id, user_id)
            return None
        return binding

    async def close(self, session_id: str, now: datetime | None = None) -> int | None:
        """Close the session; returns its duration in seconds, or None if it was unknown."""
        try:
            binding = await self._registry.release(session_id)
        except Exception:
            logger.exception("Failed to release session %s", session_id)
            return None
        if binding is None:
            logger.warning("Logout for unknown or already closed session %s", session_id)
            return None
        return await self.end_user_session(binding.user_id, binding.login_session_id, now)

    async def end_user_session(
        self,
        user_id: str,
        login_session_id: UUID | None = None,
        now: datetime | None = None,
    ) -> int | None:
        """Close the login record if there is one and log the logout. Never raises."""
        logout_time = now or self._clock()
        duration = None
        if login_session_id is not None:
            duration = await self._close_login_session(login_session_id, logout_time)

        await self._recorder.record(
            user_id,
            ActivityAction.LOGOUT,
            SESSION_ENTITY_TYPE,
            entity_name="User Logout",
            metadata={
                "loginHistoryId": str(login_session_id) if login_session_id else None,
                "logoutTime": logout_time.isoformat(),
            },
        )
        return duration

    async def _close_login_session(self, login_session_id: UUID, logout_time: datetime) -> int | None:
        try:
            async with self._uow_factory() as uow:
                login_session = await uow.login_sessions.get_by_id(login_session_id)
                if login_session is None:
                    logger.warning("Login session %s not found on logout", login_session_id)
                    return None
                if not login_session.is_active:
                    return login_session.session_duration
                duration = login_session.close(logout_time)
                await uow.login_sessions.update(login_session)
        except Exception:
            logger.exception("Failed to close login session %s", login_session_id)
            return None
        logger.info("Closed login session %s after %ss", login_session_id, duration)
        return duration
