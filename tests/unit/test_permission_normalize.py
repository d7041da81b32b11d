"""Unit tests for stored permission shape normalization."""

import logging

from fleetaudit.domain.permissions.defaults import ADMIN_MATRIX
from fleetaudit.domain.permissions.matrix import PermissionMatrix
from fleetaudit.domain.permissions.normalize import (
    load_settings_snapshot,
    parse_matrix,
    parse_patch,
)
from fleetaudit.domain.value_objects import PermissionAction, Resource, Role

R = PermissionAction.READ
C = PermissionAction.CREATE
U = PermissionAction.UPDATE
D = PermissionAction.DELETE


class TestParsePatch:
    def test_none_is_no_patch(self) -> None:
        assert parse_patch(None) is None

    def test_unrecognized_shape_warns(self, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            assert parse_patch(42) is None
            assert parse_patch("canViewTrucks") is None
        assert "unrecognized shape" in caplog.text

    def test_flat_only_boolean_keys_are_explicit(self) -> None:
        patch = parse_patch({"canViewTrucks": True, "canAddTrucks": "true", "canFly": True})
        assert patch.assignments == {(Resource.TRUCKS, R): True}

    def test_flat_manage_users_assigns_three_actions(self) -> None:
        patch = parse_patch({"canManageUsers": False})
        assert patch.assignments == {
            (Resource.USERS, C): False,
            (Resource.USERS, U): False,
            (Resource.USERS, D): False,
        }

    def test_entries_assign_every_modeled_action_of_listed_resource(self) -> None:
        patch = parse_patch([{"resource": "trucks", "actions": ["read", "update"]}])
        assert patch.assignments == {
            (Resource.TRUCKS, R): True,
            (Resource.TRUCKS, C): False,
            (Resource.TRUCKS, U): True,
            (Resource.TRUCKS, D): False,
        }

    def test_entries_union_duplicates(self) -> None:
        patch = parse_patch([
            {"resource": "admin", "actions": ["read"]},
            {"resource": "admin", "actions": ["update"]},
        ])
        assert patch.assignments == {(Resource.ADMIN, R): True, (Resource.ADMIN, U): True}

    def test_entries_ignore_unmodeled_actions(self) -> None:
        patch = parse_patch([{"resource": "reports", "actions": ["read", "export", "create"]}])
        assert patch.assignments == {(Resource.REPORTS, R): True}

    def test_listed_export_grants_read(self) -> None:
        patch = parse_patch([{"resource": "reports", "actions": ["export"]}])
        assert patch.assignments == {(Resource.REPORTS, R): True}

    def test_bad_entries_skipped(self, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            patch = parse_patch([
                "trucks",
                {"resource": "spaceships", "actions": ["read"]},
                {"resource": "mechanics", "actions": "read"},
                {"resource": "dashboard", "actions": ["read"]},
            ])
        assert patch.assignments == {(Resource.DASHBOARD, R): True}
        assert "unknown resource" in caplog.text

    def test_empty_list_is_empty_patch(self) -> None:
        assert parse_patch([]).is_empty()


class TestParseMatrix:
    def test_both_shapes_normalize_to_same_matrix(self) -> None:
        flat = parse_matrix({"canViewTrucks": True, "canEditTrucks": True, "canViewAdmin": False})
        entries = parse_matrix([{"resource": "trucks", "actions": ["update", "read"]}])
        assert flat == entries == PermissionMatrix({Resource.TRUCKS: frozenset({R, U})})

    def test_missing_flags_are_false(self) -> None:
        assert parse_matrix({}) == PermissionMatrix()

    def test_admin_flags_round_trip(self) -> None:
        assert parse_matrix(ADMIN_MATRIX.to_flags()) == ADMIN_MATRIX
        assert parse_matrix(ADMIN_MATRIX.to_entries()) == ADMIN_MATRIX


class TestLoadSettingsSnapshot:
    def test_non_mapping_gives_empty_snapshot(self) -> None:
        snapshot = load_settings_snapshot("oops")
        assert snapshot.role_overrides == {}
        assert snapshot.user_overrides == {}

    def test_unknown_roles_ignored(self) -> None:
        snapshot = load_settings_snapshot(
            {"rolePermissions": {"OWNER": {"canViewTrucks": True}, "USER": {"canViewReports": True}}}
        )
        assert list(snapshot.role_overrides) == [Role.USER]

    def test_mixed_shapes(self) -> None:
        snapshot = load_settings_snapshot(
            {
                "rolePermissions": {
                    "ADMIN": [{"resource": "admin", "actions": ["read"]}],
                    "MANAGER": {"canViewDashboard": True},
                },
                "userPermissions": {"u1": [{"resource": "reports", "actions": ["read"]}], "u2": 7},
            }
        )
        assert snapshot.role_overrides[Role.ADMIN].allows(Resource.ADMIN, R)
        assert snapshot.role_overrides[Role.MANAGER].allows(Resource.DASHBOARD, R)
        assert set(snapshot.user_overrides) == {"u1"}
