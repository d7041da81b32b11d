"""Login history API resource."""

import falcon.asgi

from fleetaudit.application.dto.queries import LoginHistoryQuery
from fleetaudit.application.use_cases.session.list_login_history import ListLoginHistoryUseCase
from fleetaudit.domain.entities import Actor, LoginSession
from fleetaudit.domain.exceptions import PermissionDenied, ValidationError
from fleetaudit.interfaces.api.resources.query_params import (
    get_datetime,
    get_page,
    isoformat,
    user_summary,
)


def login_session_to_dict(login_session: LoginSession, user: Actor | None = None) -> dict:
    return {
        "id": str(login_session.id),
        "user_id": login_session.user_id,
        "user": user_summary(user),
        "login_time": isoformat(login_session.login_time),
        "logout_time": isoformat(login_session.logout_time),
        "session_duration": login_session.session_duration,
        "ip_address": login_session.ip_address,
        "user_agent": login_session.user_agent,
        "is_active": login_session.is_active,
    }


class LoginHistoryResource:
    """GET /v1/admin/login-history - filtered, paged login sessions."""

    def __init__(self, list_login_history: ListLoginHistoryUseCase) -> None:
        self._list = list_login_history

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            query = LoginHistoryQuery(
                user_id=req.get_param("user_id"),
                start_date=get_datetime(req, "start_date"),
                end_date=get_datetime(req, "end_date"),
                is_active=req.get_param_as_bool("is_active"),
                **get_page(req),
            )
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        try:
            page = await self._list.execute(user.user_id, query)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return

        resp.media = {
            "items": [login_session_to_dict(s, page.users.get(s.user_id)) for s in page.items],
            "total": page.total,
        }
        resp.status = falcon.HTTP_200
