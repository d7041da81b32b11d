"""Permission settings API resource."""

import falcon.asgi

from fleetaudit.application.dto.permission_settings import PermissionSettings
from fleetaudit.application.dto.request_meta import request_meta_from_headers
from fleetaudit.application.use_cases.settings.get_permission_settings import (
    GetPermissionSettingsUseCase,
)
from fleetaudit.application.use_cases.settings.update_permission_settings import (
    UpdatePermissionSettingsUseCase,
)
from fleetaudit.domain.exceptions import PermissionDenied, ValidationError


def permission_settings_to_dict(settings: PermissionSettings) -> dict:
    return {
        "role_permissions": {
            role.value: {"permissions": matrix.to_flags(), "resources": matrix.to_entries()}
            for role, matrix in settings.role_matrices.items()
        },
        "user_permissions": settings.user_permissions,
    }


class PermissionSettingsResource:
    """GET/PUT /v1/settings/permissions - role and user permission overrides."""

    def __init__(
        self,
        get_settings: GetPermissionSettingsUseCase,
        update_settings: UpdatePermissionSettingsUseCase,
    ) -> None:
        self._get = get_settings
        self._update = update_settings

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            settings = await self._get.execute(user.user_id)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return

        resp.media = permission_settings_to_dict(settings)
        resp.status = falcon.HTTP_200

    async def on_put(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Body: ``{"role_permissions": {...}, "user_permissions": {...}}``, either part optional."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        body = await req.get_media(default_when_empty=None)
        if not isinstance(body, dict):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Request body must be a JSON object"}
            return

        try:
            settings = await self._update.execute(
                user.user_id,
                role_permissions=body.get("role_permissions"),
                user_permissions=body.get("user_permissions"),
                request_meta=request_meta_from_headers(req.headers),
            )
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.media = permission_settings_to_dict(settings)
        resp.status = falcon.HTTP_200
