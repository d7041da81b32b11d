"""Activity API resource."""

import falcon.asgi

from fleetaudit.application.dto.queries import ActivityQuery
from fleetaudit.application.use_cases.activity.list_activities import ListActivitiesUseCase
from fleetaudit.domain.entities import ActivityEntry, Actor
from fleetaudit.domain.exceptions import PermissionDenied, ValidationError
from fleetaudit.interfaces.api.resources.query_params import (
    get_action,
    get_datetime,
    get_page,
    isoformat,
    user_summary,
)


def activity_entry_to_dict(entry: ActivityEntry, user: Actor | None = None) -> dict:
    return {
        "id": str(entry.id),
        "user_id": entry.user_id,
        "user": user_summary(user),
        "action": entry.action.value,
        "entity_type": entry.entity_type,
        "entity_id": entry.entity_id,
        "entity_name": entry.entity_name,
        "old_values": entry.old_values,
        "new_values": entry.new_values,
        "ip_address": entry.ip_address,
        "user_agent": entry.user_agent,
        "metadata": entry.metadata,
        "created_at": isoformat(entry.created_at),
    }


class ActivitiesResource:
    """GET /v1/admin/activities - filtered, paged activity trail."""

    def __init__(self, list_activities: ListActivitiesUseCase) -> None:
        self._list = list_activities

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            query = ActivityQuery(
                user_id=req.get_param("user_id"),
                action=get_action(req),
                entity_type=req.get_param("entity_type"),
                start_date=get_datetime(req, "start_date"),
                end_date=get_datetime(req, "end_date"),
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
            "items": [activity_entry_to_dict(e, page.users.get(e.user_id)) for e in page.items],
            "total": page.total,
        }
        resp.status = falcon.HTTP_200
