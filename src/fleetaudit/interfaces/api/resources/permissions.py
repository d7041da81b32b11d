"""Current-user permission resources."""

import falcon.asgi

from fleetaudit.application.use_cases.permission.get_effective_permissions import (
    GetEffectivePermissionsUseCase,
)
from fleetaudit.domain.exceptions import NotFound


class MyPermissionsResource:
    """GET /v1/me/permissions and GET /v1/me/permissions/{resource}/{action}."""

    def __init__(self, get_effective_permissions: GetEffectivePermissionsUseCase) -> None:
        self._get_effective = get_effective_permissions

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Effective matrix in both external shapes."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            effective = await self._get_effective.execute(user.user_id)
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return

        resp.media = {
            "role": effective.role.value,
            "permissions": effective.matrix.to_flags(),
            "resources": effective.matrix.to_entries(),
        }
        resp.status = falcon.HTTP_200

    async def on_get_check(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource: str,
        action: str,
    ) -> None:
        """Point check; unknown resource or action names answer false."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            effective = await self._get_effective.execute(user.user_id)
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return

        resp.media = {"allowed": effective.has_permission(resource, action)}
        resp.status = falcon.HTTP_200
