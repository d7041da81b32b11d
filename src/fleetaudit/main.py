"""Application entry point and composition root."""

import logging

import falcon
import falcon.asgi

from fleetaudit import __version__
from fleetaudit.application.use_cases.activity.list_activities import ListActivitiesUseCase
from fleetaudit.application.use_cases.activity.record_activity import ActivityRecorder
from fleetaudit.application.use_cases.audit.list_audit_logs import ListAuditLogsUseCase
from fleetaudit.application.use_cases.permission.get_effective_permissions import (
    GetEffectivePermissionsUseCase,
)
from fleetaudit.application.use_cases.session.list_login_history import ListLoginHistoryUseCase
from fleetaudit.application.use_cases.session.session_tracker import SessionTracker
from fleetaudit.application.use_cases.settings.get_permission_settings import (
    GetPermissionSettingsUseCase,
)
from fleetaudit.application.use_cases.settings.update_permission_settings import (
    UpdatePermissionSettingsUseCase,
)
from fleetaudit.config import Settings, get_settings
from fleetaudit.domain.exceptions import NotFound, PermissionDenied, ValidationError
from fleetaudit.infrastructure.auth.keycloak_provider import KeycloakProvider
from fleetaudit.infrastructure.permission.permission_checker import SettingsPermissionChecker
from fleetaudit.infrastructure.persistence.postgres.connection import create_pool
from fleetaudit.infrastructure.persistence.postgres.session_registry import (
    PostgresSessionRegistry,
)
from fleetaudit.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from fleetaudit.infrastructure.session.memory_registry import InMemorySessionRegistry
from fleetaudit.interfaces.api.middleware.auth import AuthMiddleware
from fleetaudit.interfaces.api.middleware.cors import CORSMiddleware
from fleetaudit.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from fleetaudit.interfaces.api.middleware.session import SessionTrackingMiddleware
from fleetaudit.interfaces.api.resources.activities import ActivitiesResource
from fleetaudit.interfaces.api.resources.audit_logs import AuditLogsResource
from fleetaudit.interfaces.api.resources.health import HealthResource
from fleetaudit.interfaces.api.resources.login_history import LoginHistoryResource
from fleetaudit.interfaces.api.resources.logout import LogoutResource
from fleetaudit.interfaces.api.resources.permissions import MyPermissionsResource
from fleetaudit.interfaces.api.resources.settings import PermissionSettingsResource

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def main() -> None:
    """CLI entry point."""
    print(f"fleetaudit v{__version__}")


async def _handle_permission_denied(req, resp, ex, params):
    resp.status = falcon.HTTP_403
    resp.media = {"error": "Permission denied"}


async def _handle_not_found(req, resp, ex, params):
    resp.status = falcon.HTTP_404
    resp.media = {"error": str(ex)}


async def _handle_validation_error(req, resp, ex, params):
    resp.status = falcon.HTTP_400
    resp.media = {"error": str(ex)}


async def _log_exception(req, resp, ex, params):
    logger.error("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def build_app(
    uow_factory,
    session_registry,
    token_provider=None,
    settings: Settings | None = None,
    extra_middleware: list | None = None,
) -> falcon.asgi.App:
    """Wire use cases and resources around the given adapters."""
    settings = settings or get_settings()

    permission_checker = SettingsPermissionChecker(uow_factory)
    activity_recorder = ActivityRecorder(uow_factory)
    session_tracker = SessionTracker(uow_factory, session_registry, activity_recorder)

    get_effective_permissions = GetEffectivePermissionsUseCase(uow_factory)
    list_audit_logs = ListAuditLogsUseCase(uow_factory, permission_checker)
    list_activities = ListActivitiesUseCase(uow_factory, permission_checker)
    list_login_history = ListLoginHistoryUseCase(uow_factory, permission_checker)
    get_permission_settings = GetPermissionSettingsUseCase(uow_factory, permission_checker)
    update_permission_settings = UpdatePermissionSettingsUseCase(
        uow_factory, permission_checker, activity_recorder
    )

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app = falcon.asgi.App(
        middleware=[
            CORSMiddleware(cors_origins),
            *(extra_middleware or []),
            AuthMiddleware(token_provider),
            SessionTrackingMiddleware(
                session_tracker,
                settings.tracked_prefixes,
                cookie_name=settings.session_cookie_name,
                max_age=settings.session_max_age_seconds,
                secure=settings.environment == "production",
            ),
        ],
    )
    app.add_error_handler(Exception, _log_exception)
    app.add_error_handler(PermissionDenied, _handle_permission_denied)
    app.add_error_handler(NotFound, _handle_not_found)
    app.add_error_handler(ValidationError, _handle_validation_error)

    health_resource = HealthResource()
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    permissions_resource = MyPermissionsResource(get_effective_permissions)
    app.add_route("/v1/me/permissions", permissions_resource)
    app.add_route("/v1/me/permissions/{resource}/{action}", permissions_resource, suffix="check")
    app.add_route("/v1/admin/audit-logs", AuditLogsResource(list_audit_logs))
    app.add_route("/v1/admin/activities", ActivitiesResource(list_activities))
    app.add_route("/v1/admin/login-history", LoginHistoryResource(list_login_history))
    app.add_route(
        "/v1/settings/permissions",
        PermissionSettingsResource(get_permission_settings, update_permission_settings),
    )
    app.add_route(
        "/v1/auth/logout",
        LogoutResource(session_tracker, cookie_name=settings.session_cookie_name),
    )
    return app


def create_fleetaudit_app() -> falcon.asgi.App:
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings.log_level)

    pool = create_pool(settings.database_url)
    uow_factory = create_uow_factory(pool)

    if settings.session_registry == "memory":
        session_registry = InMemorySessionRegistry()
    else:
        session_registry = PostgresSessionRegistry(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("Keycloak client secret not set; all requests are unauthenticated")

    return build_app(
        uow_factory,
        session_registry,
        token_provider=keycloak,
        settings=settings,
        extra_middleware=[PoolLifespanMiddleware(pool)],
    )


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    uvicorn.run(
        "fleetaudit.main:create_fleetaudit_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
    )
