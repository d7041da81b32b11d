"""Session middleware - opens a login session on the first tracked request."""

import logging

import falcon.asgi

from fleetaudit.application.dto.request_meta import request_meta_from_headers
from fleetaudit.application.use_cases.session.session_tracker import SessionTracker

logger = logging.getLogger(__name__)


class SessionTrackingMiddleware:
    """Ensures an authenticated user on a tracked path has an open session.

    Runs after AuthMiddleware. A request whose session cookie is missing
    unknown to the registry or bound to another user opens a new login session and receives the
    new cookie. Tracking failures never fail the request.
    """

    def __init__(
        self,
        session_tracker: SessionTracker,
        tracked_prefixes: list[str],
        cookie_name: str = "session-id",
        max_age: int = 60 * 60 * 24 * 7,
        secure: bool = False,
    ) -> None:
        self._tracker = session_tracker
        self._prefixes = tuple(tracked_prefixes)
        self._cookie_name = cookie_name
        self._max_age = max_age
        self._secure = secure

    def _is_tracked(self, path: str) -> bool:
        return any(path == p or path.startswith(p.rstrip("/") + "/") for p in self._prefixes)

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if req.method == "OPTIONS" or not self._is_tracked(req.path):
            return
        user = getattr(req.context, "user", None)
        if not user:
            return

        try:
            session_id = req.cookies.get(self._cookie_name)
            if session_id and await self._tracker.session_for(user.user_id, session_id):
                return
            session_id = await self._tracker.open(
                user.user_id, request_meta_from_headers(req.headers)
            )
        except Exception:
            logger.exception("Failed to open session for user %s", user.user_id)
            return

        resp.set_cookie(
            self._cookie_name,
            session_id,
            max_age=self._max_age,
            path="/",
            secure=self._secure,
            http_only=True,
            same_site="Lax",
        )
