"""Auth middleware - resolves the current user from a bearer token."""

from dataclasses import dataclass

import falcon.asgi


@dataclass
class RequestUser:
    """User from request context."""

    user_id: str
    email: str | None = None
    username: str | None = None


class AuthMiddleware:
    """Middleware that verifies the bearer token and sets req.context.user.

    Token verification is delegated to the provider; requests without a
    verifiable token get ``req.context.user = None``.
    """

    def __init__(self, token_provider=None) -> None:
        self._provider = token_provider

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Extract user from Authorization header."""
        req.context.user = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer ") or not self._provider:
            return
        user = self._provider.decode_token(auth[7:])
        if user:
            req.context.user = RequestUser(
                user_id=user.user_id,
                email=user.email,
                username=user.username,
            )
