"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- In-memory row store standing in for Baserow
- Google OAuth/Calendar endpoints served by an httpx.MockTransport
- Test client (FastAPI TestClient) wired to both
- Sample user factories
"""

import copy
import json
from typing import Any, Dict, Generator, List, Optional
from urllib.parse import parse_qs

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.core.security import hash_password
from app.deps import get_google_auth_client, get_row_store
from app.environments.google.auth import GoogleAuthClient
from app.main import app
from app.repositories.user_repository import UserRepository


# ---------------------------------------------------------------------------
# ROW STORE FAKE
# ---------------------------------------------------------------------------

class FakeRowStore:
    """
    In-memory replacement for BaserowClient.

    Supports the "equal" and "link_row_has" filter types used by the app.
    Every call is recorded in `calls` as (operation, table_id, ...).
    """

    def __init__(self):
        self.tables: Dict[int, Dict[int, Dict[str, Any]]] = {}
        self.calls: List[tuple] = []
        self._next_id = 1
        self.fail_with: Optional[Exception] = None

    def add_row(self, table_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        row_id = fields.get("id") or self._next_id
        self._next_id = max(self._next_id, row_id) + 1
        row = {**fields, "id": row_id}
        self.tables.setdefault(table_id, {})[row_id] = row
        return copy.deepcopy(row)

    def count(self, operation: str) -> int:
        return sum(1 for call in self.calls if call[0] == operation)

    def _check_failure(self):
        if self.fail_with is not None:
            raise self.fail_with

    @staticmethod
    def _matches(row: Dict[str, Any], key: str, value: Any) -> bool:
        field, _, filter_type = key.rpartition("__")
        if filter_type == "equal":
            return str(row.get(field)) == str(value)
        if filter_type == "link_row_has":
            return int(value) in (row.get(field) or [])
        raise AssertionError(f"Unsupported filter {key}")

    async def find(self, table_id: int, filters: Optional[Dict[str, Any]] = None):
        self.calls.append(("find", table_id, dict(filters or {})))
        self._check_failure()
        rows = self.tables.get(table_id, {}).values()
        return [
            copy.deepcopy(row)
            for row in rows
            if all(self._matches(row, key, value) for key, value in (filters or {}).items())
        ]

    async def get_row(self, table_id: int, row_id: int):
        self.calls.append(("get_row", table_id, row_id))
        self._check_failure()
        row = self.tables.get(table_id, {}).get(row_id)
        return copy.deepcopy(row) if row else None

    async def insert(self, table_id: int, fields: Dict[str, Any]):
        self.calls.append(("insert", table_id, dict(fields)))
        self._check_failure()
        return self.add_row(table_id, dict(fields))

    async def update(self, table_id: int, row_id: int, fields: Dict[str, Any]):
        self.calls.append(("update", table_id, row_id, dict(fields)))
        self._check_failure()
        row = self.tables[table_id][row_id]
        row.update(fields)
        return copy.deepcopy(row)

    async def delete(self, table_id: int, row_id: int) -> None:
        self.calls.append(("delete", table_id, row_id))
        self._check_failure()
        self.tables.get(table_id, {}).pop(row_id, None)


@pytest.fixture
def row_store() -> FakeRowStore:
    return FakeRowStore()


@pytest.fixture
def users(row_store: FakeRowStore) -> UserRepository:
    return UserRepository(row_store, table_id=settings.USERS_TABLE_ID)


# ---------------------------------------------------------------------------
# GOOGLE FAKE
# ---------------------------------------------------------------------------

class FakeGoogle:
    """
    Serves Google's token endpoint and Calendar events.insert.

    `requests` holds every request that reached "Google", so tests can
    assert that nothing was sent.
    """

    VALID_CODE = "valid-code"
    NO_REFRESH_CODE = "no-refresh-code"
    ISSUED_REFRESH_TOKEN = "1//issued-refresh-token"
    REVOKED_REFRESH_TOKEN = "1//revoked"

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.calendar_status = 200

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if str(request.url) == GoogleAuthClient.TOKEN_URL:
            form = {key: values[0] for key, values in parse_qs(request.content.decode()).items()}
            return self._token_response(form)

        if request.url.path.endswith("/events") and request.method == "POST":
            if self.calendar_status != 200:
                return httpx.Response(self.calendar_status, json={"error": {"message": "boom"}})
            body = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "id": "evt_123",
                    "summary": body["summary"],
                    "start": body["start"],
                    "end": body["end"],
                    "htmlLink": "https://calendar.google.com/event?eid=evt_123",
                },
            )

        return httpx.Response(404, json={"error": "not found"})

    @staticmethod
    def _token_response(form: Dict[str, str]) -> httpx.Response:
        if form.get("grant_type") == "authorization_code":
            if form.get("code") == FakeGoogle.VALID_CODE:
                return httpx.Response(200, json={
                    "access_token": "ya29.first",
                    "expires_in": 3599,
                    "refresh_token": FakeGoogle.ISSUED_REFRESH_TOKEN,
                    "scope": "https://www.googleapis.com/auth/calendar.events",
                    "token_type": "Bearer",
                })
            if form.get("code") == FakeGoogle.NO_REFRESH_CODE:
                return httpx.Response(200, json={"access_token": "ya29.first", "expires_in": 3599})
            return httpx.Response(400, json={"error": "invalid_grant", "error_description": "Bad Request"})

        if form.get("grant_type") == "refresh_token":
            if form.get("refresh_token") == FakeGoogle.REVOKED_REFRESH_TOKEN:
                return httpx.Response(400, json={
                    "error": "invalid_grant",
                    "error_description": "Token has been expired or revoked.",
                })
            return httpx.Response(200, json={"access_token": "ya29.refreshed", "expires_in": 3599})

        return httpx.Response(400, json={"error": "unsupported_grant_type"})

    def calendar_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if "calendar/v3" in str(r.url)]


@pytest.fixture
def fake_google() -> FakeGoogle:
    return FakeGoogle()


@pytest.fixture
def auth_client(fake_google: FakeGoogle) -> GoogleAuthClient:
    return GoogleAuthClient(
        client_id="test-client-id",
        client_secret="test-client-secret",
        redirect_uri="http://testserver/google/auth/callback",
        transport=httpx.MockTransport(fake_google.handler),
    )


# ---------------------------------------------------------------------------
# API CLIENT
# ---------------------------------------------------------------------------

@pytest.fixture
def client(row_store: FakeRowStore, auth_client: GoogleAuthClient) -> Generator[TestClient, None, None]:
    """
    Test client with Baserow and Google replaced by the fakes above.
    """
    app.dependency_overrides[get_row_store] = lambda: row_store
    app.dependency_overrides[get_google_auth_client] = lambda: auth_client

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# USER FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def test_user(row_store: FakeRowStore) -> Dict[str, Any]:
    """
    A user row with email "recruiter@example.com" and password "secret1",
    not connected to Google.
    """
    return row_store.add_row(settings.USERS_TABLE_ID, {
        "id": 42,
        "nome": "Test Recruiter",
        "empresa": "Acme",
        "telefone": "+55 11 90000-0000",
        "Email": "recruiter@example.com",
        "senha_hash": hash_password("secret1"),
        "avatar_url": None,
        "google_refresh_token": None,
    })


@pytest.fixture
def connected_user(row_store: FakeRowStore, test_user: Dict[str, Any]) -> Dict[str, Any]:
    """test_user with a stored Google refresh token."""
    row_store.tables[settings.USERS_TABLE_ID][test_user["id"]]["google_refresh_token"] = "1//stored-token"
    return row_store.tables[settings.USERS_TABLE_ID][test_user["id"]]
