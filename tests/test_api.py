"""
End-to-end tests through the HTTP API.

Baserow and Google are replaced by the fakes in conftest; everything in
between (routers, services, error handlers) is the real application.
"""

from unittest.mock import patch
from urllib.parse import parse_qs, urlparse

from app.core.config import settings
from app.routers.google_auth import CLOSE_POPUP_HTML
from app.services import google_connection_service as connection_module

from conftest import FakeGoogle


INTERVIEW = {
    "userId": 42,
    "eventData": {"start": "2025-01-15T14:00:00", "end": "2025-01-15T15:00:00"},
    "candidate": {"id": 7, "nome": "Ana Souza", "email": "ana@example.com"},
    "job": {"id": 3, "titulo": "Backend Developer"},
}


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestAuthEndpoints:

    def test_signup_returns_profile(self, client):
        response = client.post("/auth/signup", json={
            "nome": "Ana", "empresa": "Acme", "telefone": "123",
            "email": "Ana@Acme.com", "password": "secret1",
        })

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["user"]["email"] == "ana@acme.com"
        assert data["user"]["company"] == "Acme"
        assert "senha_hash" not in response.text
        assert "password_hash" not in response.text

    def test_signup_same_email_other_case_conflicts(self, client, row_store):
        first = client.post("/auth/signup", json={"name": "A", "email": "a@x.com", "password": "secret1"})
        second = client.post("/auth/signup", json={"name": "B", "email": "A@X.com", "password": "secret2"})

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json()["success"] is False
        assert row_store.count("insert") == 1

    def test_signup_missing_password(self, client):
        response = client.post("/auth/signup", json={"name": "Ana", "email": "ana@acme.com"})

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_signup_blank_email(self, client, row_store):
        response = client.post("/auth/signup", json={"name": "Ana", "email": "   ", "password": "secret1"})

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert row_store.count("insert") == 0

    def test_login(self, client, test_user):
        response = client.post("/auth/login", json={"email": "recruiter@example.com", "password": "secret1"})

        assert response.status_code == 200
        assert response.json()["user"]["id"] == 42

    def test_login_failures_are_indistinguishable(self, client, test_user):
        unknown = client.post("/auth/login", json={"email": "nobody@example.com", "password": "secret1"})
        wrong = client.post("/auth/login", json={"email": "recruiter@example.com", "password": "nope123"})

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json() == wrong.json()
        assert unknown.json() == {"success": False, "error": "Invalid email or password"}

    def test_login_blank_email(self, client, row_store, test_user):
        response = client.post("/auth/login", json={"email": " ", "password": "secret1"})

        assert response.status_code == 400
        assert row_store.calls == []

    def test_malformed_body(self, client):
        response = client.post(
            "/auth/login",
            content="not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid request body"}


class TestUserEndpoints:

    def test_get_user(self, client, test_user):
        response = client.get("/users/42")

        assert response.status_code == 200
        assert response.json()["email"] == "recruiter@example.com"
        assert response.json()["google_connected"] is False

    def test_get_unknown_user(self, client):
        response = client.get("/users/999")

        assert response.status_code == 404

    def test_get_user_with_non_numeric_id(self, client):
        assert client.get("/users/abc").status_code == 400

    def test_get_user_with_superscript_id(self, client, test_user):
        response = client.get("/users/²")

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_update_profile(self, client, row_store, test_user):
        response = client.patch("/users/42/profile", json={"nome": "Renamed", "Email": "x@y.com"})

        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Renamed"
        assert row_store.tables[settings.USERS_TABLE_ID][42]["Email"] == "recruiter@example.com"

    def test_update_profile_empty_body(self, client, test_user):
        response = client.patch("/users/42/profile", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "No data to update"

    def test_change_password(self, client, test_user):
        response = client.patch("/users/42/password", json={"password": "abcdef"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Password updated successfully"}
        login = client.post("/auth/login", json={"email": "recruiter@example.com", "password": "abcdef"})
        assert login.status_code == 200

    def test_change_password_too_short(self, client, test_user):
        response = client.patch("/users/42/password", json={"password": "abcde"})

        assert response.status_code == 400


class TestGoogleAuthEndpoints:

    def test_connect_returns_consent_url(self, client):
        response = client.get("/google/auth/connect", params={"userId": "42"})

        assert response.status_code == 200
        params = parse_qs(urlparse(response.json()["url"]).query)
        assert params["state"] == ["42"]
        assert params["access_type"] == ["offline"]
        assert params["prompt"] == ["consent"]

    def test_connect_without_user_id(self, client):
        assert client.get("/google/auth/connect").status_code == 400

    def test_callback_connects_user(self, client, row_store, test_user):
        response = client.get(
            "/google/auth/callback",
            params={"code": FakeGoogle.VALID_CODE, "state": "42"},
        )

        assert response.status_code == 200
        assert response.text == CLOSE_POPUP_HTML
        assert response.headers["content-type"].startswith("text/html")
        status = client.get("/google/auth/status", params={"userId": "42"})
        assert status.json() == {"isConnected": True}

    def test_callback_failure_still_closes_popup(self, client, row_store, test_user):
        response = client.get("/google/auth/callback", params={"code": "expired-code", "state": "42"})

        assert response.status_code == 200
        assert response.text == CLOSE_POPUP_HTML
        assert row_store.tables[settings.USERS_TABLE_ID][42]["google_refresh_token"] is None

    def test_callback_consent_denied(self, client, fake_google):
        response = client.get("/google/auth/callback", params={"error": "access_denied", "state": "42"})

        assert response.status_code == 200
        assert response.text == CLOSE_POPUP_HTML
        assert fake_google.requests == []

    def test_callback_with_superscript_state(self, client, row_store, fake_google, test_user):
        response = client.get(
            "/google/auth/callback",
            params={"code": FakeGoogle.VALID_CODE, "state": "²"},
        )

        assert response.status_code == 200
        assert response.text == CLOSE_POPUP_HTML
        assert fake_google.requests == []
        assert row_store.count("update") == 0

    def test_callback_unexpected_error_still_closes_popup(self, client, test_user):
        with patch.object(connection_module, "parse_user_id", side_effect=RuntimeError("boom")):
            response = client.get(
                "/google/auth/callback",
                params={"code": FakeGoogle.VALID_CODE, "state": "42"},
            )

        assert response.status_code == 200
        assert response.text == CLOSE_POPUP_HTML

    def test_disconnect(self, client, connected_user):
        response = client.post("/google/auth/disconnect", json={"userId": 42})

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert client.get("/google/auth/status", params={"userId": 42}).json() == {"isConnected": False}

    def test_disconnect_without_user_id(self, client):
        assert client.post("/google/auth/disconnect", json={}).status_code == 400

    def test_status_for_unknown_user(self, client):
        response = client.get("/google/auth/status", params={"userId": "999"})

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Error checking connection status"}


class TestCreateEventEndpoint:

    def test_create_event(self, client, connected_user, fake_google):
        response = client.post("/google/calendar/create-event", json=INTERVIEW)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Event created successfully"
        assert data["event"]["event_id"] == "evt_123"
        assert len(fake_google.calendar_requests()) == 1

    def test_unconnected_user_gets_401_without_calling_google(self, client, test_user, fake_google):
        response = client.post("/google/calendar/create-event", json=INTERVIEW)

        assert response.status_code == 401
        assert response.json()["success"] is False
        assert fake_google.requests == []

    def test_missing_candidate(self, client, connected_user):
        body = {key: value for key, value in INTERVIEW.items() if key != "candidate"}

        response = client.post("/google/calendar/create-event", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "Insufficient data"

    def test_mixed_offset_awareness(self, client, connected_user, fake_google):
        body = dict(INTERVIEW, eventData={"start": "2025-01-15T14:00:00Z", "end": "2025-01-15T15:00:00"})

        response = client.post("/google/calendar/create-event", json=body)

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid event data"}
        assert fake_google.requests == []

    def test_google_failure(self, client, connected_user, fake_google):
        fake_google.calendar_status = 500

        response = client.post("/google/calendar/create-event", json=INTERVIEW)

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to create event"}


class TestSchedulesEndpoint:

    def test_list_schedules(self, client, row_store):
        row_store.add_row(settings.SCHEDULES_TABLE_ID, {"id": 1, "Candidato__usuario": [42]})

        response = client.get("/schedules/42")

        assert response.status_code == 200
        assert response.json() == {"success": True, "results": [{"id": 1, "Candidato__usuario": [42]}]}
