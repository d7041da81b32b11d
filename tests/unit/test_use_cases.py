"""Unit tests for permission and listing use cases."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from fleetaudit.application.dto.queries import ActivityQuery, AuditLogQuery, LoginHistoryQuery
from fleetaudit.application.use_cases.activity.list_activities import ListActivitiesUseCase
from fleetaudit.application.use_cases.audit.list_audit_logs import ListAuditLogsUseCase
from fleetaudit.application.use_cases.permission.get_effective_permissions import (
    GetEffectivePermissionsUseCase,
)
from fleetaudit.application.use_cases.session.list_login_history import ListLoginHistoryUseCase
from fleetaudit.domain.entities import ActivityEntry, Actor, AuditEntry, LoginSession
from fleetaudit.domain.exceptions import NotFound, PermissionDenied
from fleetaudit.domain.permissions.matrix import PermissionPatch
from fleetaudit.domain.value_objects import ActivityAction, PermissionAction, Resource, Role

T0 = datetime(2026, 3, 1, 9, 0, 0, tzinfo=UTC)


def _audit(n: int, **overrides) -> AuditEntry:
    fields = dict(
        id=uuid4(),
        action=ActivityAction.UPDATE,
        entity_type="Truck",
        entity_id=f"t{n}",
        user_id="admin-1",
        created_at=T0 + timedelta(minutes=n),
    )
    fields.update(overrides)
    return AuditEntry(**fields)


def _activity(n: int, **overrides) -> ActivityEntry:
    fields = dict(
        id=uuid4(),
        user_id="user-1",
        action=ActivityAction.VIEW,
        entity_type="Truck",
        created_at=T0 + timedelta(minutes=n),
    )
    fields.update(overrides)
    return ActivityEntry(**fields)


# --- GetEffectivePermissionsUseCase ---


@pytest.mark.asyncio
async def test_effective_permissions_for_user(uow_factory) -> None:
    effective = await GetEffectivePermissionsUseCase(uow_factory).execute("user-1")
    assert effective.role == Role.USER
    assert effective.can_access("trucks")
    assert not effective.can_delete("trucks")


@pytest.mark.asyncio
async def test_effective_permissions_apply_settings(uow_factory, fake_uow) -> None:
    fake_uow.settings.set_raw({"userPermissions": {"user-1": {"canDeleteTrucks": True}}})
    effective = await GetEffectivePermissionsUseCase(uow_factory).execute("user-1")
    assert effective.can_delete("trucks")


@pytest.mark.asyncio
async def test_effective_permissions_use_profile_override(uow_factory, fake_uow) -> None:
    fake_uow.users.add(
        Actor(
            id="user-2",
            role=Role.USER,
            permissions=PermissionPatch({(Resource.REPORTS, PermissionAction.READ): True}),
        )
    )
    effective = await GetEffectivePermissionsUseCase(uow_factory).execute("user-2")
    assert effective.can_access("reports")


@pytest.mark.asyncio
async def test_effective_permissions_unknown_user(uow_factory) -> None:
    with pytest.raises(NotFound):
        await GetEffectivePermissionsUseCase(uow_factory).execute("ghost")


# --- ListAuditLogsUseCase ---


@pytest.mark.asyncio
async def test_list_audit_logs_newest_first_with_total(uow_factory, fake_uow, mock_permission_checker) -> None:
    for n in range(5):
        await fake_uow.audit_logs.create(_audit(n))

    page = await ListAuditLogsUseCase(uow_factory, mock_permission_checker).execute(
        "admin-1", AuditLogQuery(limit=2, offset=1)
    )

    assert page.total == 5
    assert [e.entity_id for e in page.items] == ["t3", "t2"]
    mock_permission_checker.check.assert_awaited_once_with(
        "admin-1", Resource.ADMIN, PermissionAction.READ
    )


@pytest.mark.asyncio
async def test_list_audit_logs_filters(uow_factory, fake_uow, mock_permission_checker) -> None:
    await fake_uow.audit_logs.create(_audit(1, action=ActivityAction.CREATE))
    await fake_uow.audit_logs.create(_audit(2, entity_type="Mechanic"))
    await fake_uow.audit_logs.create(_audit(3))

    page = await ListAuditLogsUseCase(uow_factory, mock_permission_checker).execute(
        "admin-1",
        AuditLogQuery(action=ActivityAction.UPDATE, entity_type="Truck", start_date=T0, end_date=T0 + timedelta(minutes=3)),
    )
    assert [e.entity_id for e in page.items] == ["t3"]
    assert page.total == 1


@pytest.mark.asyncio
async def test_list_audit_logs_requires_admin_read(uow_factory, mock_permission_checker) -> None:
    mock_permission_checker.check.return_value = False
    with pytest.raises(PermissionDenied):
        await ListAuditLogsUseCase(uow_factory, mock_permission_checker).execute("user-1", AuditLogQuery())


# --- ListActivitiesUseCase ---


@pytest.mark.asyncio
async def test_list_activities_by_user(uow_factory, fake_uow, mock_permission_checker) -> None:
    await fake_uow.activities.create(_activity(1))
    await fake_uow.activities.create(_activity(2, user_id="manager-1"))
    await fake_uow.activities.create(_activity(3, action=ActivityAction.LOGIN, entity_type="USER_SESSION"))

    page = await ListActivitiesUseCase(uow_factory, mock_permission_checker).execute(
        "admin-1", ActivityQuery(user_id="user-1")
    )
    assert page.total == 2
    assert [e.action for e in page.items] == [ActivityAction.LOGIN, ActivityAction.VIEW]
    assert page.users["user-1"].name == "Uma User"
    assert set(page.users) == {"user-1"}


@pytest.mark.asyncio
async def test_list_activities_requires_admin_read(uow_factory, mock_permission_checker) -> None:
    mock_permission_checker.check.return_value = False
    with pytest.raises(PermissionDenied):
        await ListActivitiesUseCase(uow_factory, mock_permission_checker).execute("user-1", ActivityQuery())


# --- ListLoginHistoryUseCase ---


@pytest.mark.asyncio
async def test_list_login_history_active_only(uow_factory, fake_uow, mock_permission_checker) -> None:
    open_session = LoginSession(id=uuid4(), user_id="user-1", login_time=T0)
    closed_session = LoginSession(id=uuid4(), user_id="user-1", login_time=T0 + timedelta(hours=1))
    closed_session.close(T0 + timedelta(hours=2))
    await fake_uow.login_sessions.create(open_session)
    await fake_uow.login_sessions.create(closed_session)

    use_case = ListLoginHistoryUseCase(uow_factory, mock_permission_checker)
    active = await use_case.execute("admin-1", LoginHistoryQuery(is_active=True))
    everything = await use_case.execute("admin-1", LoginHistoryQuery())

    assert active.items == [open_session]
    assert everything.items == [closed_session, open_session]
    assert everything.users["user-1"].email == "uma@fleet.test"


@pytest.mark.asyncio
async def test_list_login_history_unknown_user_has_no_profile(uow_factory, fake_uow, mock_permission_checker) -> None:
    await fake_uow.login_sessions.create(LoginSession(id=uuid4(), user_id="deleted-7", login_time=T0))

    page = await ListLoginHistoryUseCase(uow_factory, mock_permission_checker).execute(
        "admin-1", LoginHistoryQuery()
    )

    assert page.total == 1
    assert page.users == {}


@pytest.mark.asyncio
async def test_list_login_history_requires_admin_read(uow_factory, mock_permission_checker) -> None:
    mock_permission_checker.check.return_value = False
    with pytest.raises(PermissionDenied, match="admin access"):
        await ListLoginHistoryUseCase(uow_factory, mock_permission_checker).execute(
            "user-1", LoginHistoryQuery()
        )
