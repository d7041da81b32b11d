"""Keycloak OIDC provider for access token validation."""

import logging
from dataclasses import dataclass, field

from keycloak import KeycloakOpenID

logger = logging.getLogger(__name__)


@dataclass
class OIDCUser:
    """Authenticated user from OIDC token."""

    user_id: str
    email: str | None = None
    username: str | None = None
    realm_roles: list[str] = field(default_factory=list)


class KeycloakProvider:
    """Keycloak OIDC - introspects access tokens and extracts user info."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    def decode_token(self, token: str) -> OIDCUser | None:
        """Introspect token, return user info or None if inactive or unverifiable."""
        try:
            token_info = self._keycloak.introspect(token)
        except Exception:
            logger.warning("Token introspection failed", exc_info=True)
            return None
        if not token_info.get("active") or not token_info.get("sub"):
            return None
        return OIDCUser(
            user_id=token_info["sub"],
            email=token_info.get("email"),
            username=token_info.get("preferred_username"),
            realm_roles=token_info.get("realm_access", {}).get("roles", []),
        )
