"""Audit log API resource."""

import falcon.asgi

from fleetaudit.application.dto.queries import AuditLogQuery
from fleetaudit.application.use_cases.audit.list_audit_logs import ListAuditLogsUseCase
from fleetaudit.domain.entities import AuditEntry
from fleetaudit.domain.exceptions import PermissionDenied, ValidationError
from fleetaudit.interfaces.api.resources.query_params import (
    get_action,
    get_datetime,
    get_page,
    isoformat,
)


def audit_entry_to_dict(entry: AuditEntry) -> dict:
    return {
        "id": str(entry.id),
        "action": entry.action.value,
        "entity_type": entry.entity_type,
        "entity_id": entry.entity_id,
        "user_id": entry.user_id,
        "user_name": entry.user_name,
        "user_email": entry.user_email,
        "user_role": entry.user_role,
        "changes": entry.changes,
        "ip_address": entry.ip_address,
        "user_agent": entry.user_agent,
        "created_at": isoformat(entry.created_at),
    }


class AuditLogsResource:
    """GET /v1/admin/audit-logs - filtered, paged audit trail."""

    def __init__(self, list_audit_logs: ListAuditLogsUseCase) -> None:
        self._list = list_audit_logs

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            query = AuditLogQuery(
                user_id=req.get_param("user_id"),
                action=get_action(req),
                entity_type=req.get_param("entity_type"),
                entity_id=req.get_param("entity_id"),
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
            "items": [audit_entry_to_dict(e) for e in page.items],
            "total": page.total,
        }
        resp.status = falcon.HTTP_200
