"""API tests for session tracking and logout."""

from falcon.testing import TestClient

from fleetaudit.domain.value_objects import ActivityAction

from tests.api.conftest import bearer


def _actions(fake_uow) -> list[ActivityAction]:
    return [a.action for a in fake_uow.activities.entries]


class TestSessionMiddleware:
    def test_first_tracked_request_opens_session(self, client: TestClient, fake_uow, registry) -> None:
        result = client.simulate_get("/v1/me/permissions", headers=bearer("user-1"))

        cookie = result.cookies["session-id"]
        assert cookie.value.startswith("session_")
        assert cookie.http_only is True
        assert cookie.same_site == "Lax"
        assert cookie.max_age == 604800
        assert len(registry) == 1
        assert len(fake_uow.login_sessions.all()) == 1
        assert _actions(fake_uow) == [ActivityAction.LOGIN]

    def test_known_cookie_keeps_session(self, client: TestClient, fake_uow) -> None:
        first = client.simulate_get("/v1/me/permissions", headers=bearer("user-1"))
        session_id = first.cookies["session-id"].value

        second = client.simulate_get(
            "/v1/me/permissions", headers=bearer("user-1"), cookies={"session-id": session_id}
        )

        assert "session-id" not in second.cookies
        assert len(fake_uow.login_sessions.all()) == 1

    def test_unknown_cookie_opens_new_session(self, client: TestClient, fake_uow) -> None:
        result = client.simulate_get(
            "/v1/me/permissions",
            headers=bearer("user-1"),
            cookies={"session-id": "session_1_stalecook"},
        )
        assert result.cookies["session-id"].value != "session_1_stalecook"
        assert len(fake_uow.login_sessions.all()) == 1

    def test_cookie_of_another_user_opens_own_session(self, client: TestClient, fake_uow, registry) -> None:
        admin = client.simulate_get("/v1/me/permissions", headers=bearer("admin-1"))
        admin_session = admin.cookies["session-id"].value

        result = client.simulate_get(
            "/v1/me/permissions", headers=bearer("user-1"), cookies={"session-id": admin_session}
        )

        assert result.cookies["session-id"].value != admin_session
        assert len(registry) == 2
        logins = [(a.user_id, a.action) for a in fake_uow.activities.entries]
        assert logins == [("admin-1", ActivityAction.LOGIN), ("user-1", ActivityAction.LOGIN)]
        assert sorted(s.user_id for s in fake_uow.login_sessions.all()) == ["admin-1", "user-1"]

    def test_anonymous_request_not_tracked(self, client: TestClient, fake_uow) -> None:
        client.simulate_get("/v1/me/permissions")
        assert fake_uow.login_sessions.all() == []

    def test_untracked_path(self, client: TestClient, fake_uow) -> None:
        result = client.simulate_get("/v1/health", headers=bearer("user-1"))
        assert "session-id" not in result.cookies
        assert fake_uow.login_sessions.all() == []

    def test_client_ip_recorded(self, client: TestClient, fake_uow) -> None:
        client.simulate_get(
            "/v1/me/permissions",
            headers={**bearer("user-1"), "X-Forwarded-For": "203.0.113.7, 10.0.0.1", "User-Agent": "fleet-app/2.1"},
        )
        [login_session] = fake_uow.login_sessions.all()
        assert login_session.ip_address == "203.0.113.7"
        assert login_session.user_agent == "fleet-app/2.1"

    def test_oversized_forwarded_for_not_recorded(self, client: TestClient, fake_uow) -> None:
        client.simulate_get(
            "/v1/me/permissions",
            headers={**bearer("user-1"), "X-Forwarded-For": "a" * 300, "X-Real-IP": "198.51.100.4"},
        )
        [login_session] = fake_uow.login_sessions.all()
        assert login_session.ip_address == "198.51.100.4"


class TestLogout:
    def test_requires_authentication(self, client: TestClient) -> None:
        assert client.simulate_post("/v1/auth/logout").status_code == 401

    def test_closes_cookie_session(self, client: TestClient, fake_uow, registry) -> None:
        opened = client.simulate_get("/v1/me/permissions", headers=bearer("user-1"))
        session_id = opened.cookies["session-id"].value

        result = client.simulate_post(
            "/v1/auth/logout", headers=bearer("user-1"), cookies={"session-id": session_id}
        )

        assert result.status_code == 200
        assert result.json == {"message": "Logged out successfully"}
        assert result.cookies["session-id"].value == ""
        [login_session] = fake_uow.login_sessions.all()
        assert login_session.is_active is False
        assert login_session.session_duration >= 0
        assert len(registry) == 0
        assert _actions(fake_uow) == [ActivityAction.LOGIN, ActivityAction.LOGOUT]

    def test_without_cookie_still_logs_out(self, client: TestClient, fake_uow) -> None:
        result = client.simulate_post("/v1/auth/logout", headers=bearer("user-1"))

        assert result.status_code == 200
        assert _actions(fake_uow) == [ActivityAction.LOGOUT]
        assert fake_uow.login_sessions.all() == []

    def test_stale_cookie(self, client: TestClient, fake_uow) -> None:
        result = client.simulate_post(
            "/v1/auth/logout", headers=bearer("user-1"), cookies={"session-id": "session_1_stalecook"}
        )
        assert result.status_code == 200
        assert _actions(fake_uow) == [ActivityAction.LOGOUT]

    def test_cookie_of_another_user_leaves_that_session_open(
        self, client: TestClient, fake_uow, registry
    ) -> None:
        admin = client.simulate_get("/v1/me/permissions", headers=bearer("admin-1"))
        admin_session = admin.cookies["session-id"].value

        result = client.simulate_post(
            "/v1/auth/logout", headers=bearer("user-1"), cookies={"session-id": admin_session}
        )

        assert result.status_code == 200
        [admin_login] = fake_uow.login_sessions.all()
        assert admin_login.user_id == "admin-1"
        assert admin_login.is_active is True
        assert len(registry) == 1
        trail = [(a.user_id, a.action) for a in fake_uow.activities.entries]
        assert trail == [("admin-1", ActivityAction.LOGIN), ("user-1", ActivityAction.LOGOUT)]
