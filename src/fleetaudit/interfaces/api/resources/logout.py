"""Logout endpoint."""

import logging

import falcon.asgi

from fleetaudit.application.use_cases.session.session_tracker import SessionTracker

logger = logging.getLogger(__name__)


class LogoutResource:
    """POST /v1/auth/logout - close the current session and drop its cookie."""

    def __init__(self, session_tracker: SessionTracker, cookie_name: str = "session-id") -> None:
        self._tracker = session_tracker
        self._cookie_name = cookie_name

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Logout never fails for an authenticated user."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        session_id = req.cookies.get(self._cookie_name)
        try:
            binding = None
            if session_id:
                binding = await self._tracker.session_for(user.user_id, session_id)
        except Exception:
            logger.exception("Session lookup failed on logout for user %s", user.user_id)
            binding = None

        if binding is not None:
            await self._tracker.close(session_id)
        else:
            # No session owned by this user: still leave a LOGOUT trail for the user.
            await self._tracker.end_user_session(user.user_id)

        resp.unset_cookie(self._cookie_name, path="/")
        resp.media = {"message": "Logged out successfully"}
        resp.status = falcon.HTTP_200
