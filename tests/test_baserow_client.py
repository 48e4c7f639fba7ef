"""
Tests for the Baserow row-store client.

Requests are answered by an httpx.MockTransport so the exact URLs,
query strings and headers can be checked.
"""

import json

import httpx
import pytest

from app.environments.base import RowStoreError
from app.environments.baserow.client import BaserowClient


def make_client(handler) -> BaserowClient:
    return BaserowClient(
        base_url="https://rows.example.com/",
        token="db-token",
        transport=httpx.MockTransport(handler),
    )


class TestBaserowReads:

    @pytest.mark.asyncio
    async def test_find_sends_filters_and_token(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"count": 1, "results": [{"id": 1, "Email": "a@x.com"}]})

        rows = await make_client(handler).find(711, {"Email__equal": "a@x.com"})

        assert rows == [{"id": 1, "Email": "a@x.com"}]
        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/api/database/rows/table/711/"
        assert request.url.params["filter__Email__equal"] == "a@x.com"
        assert request.url.params["user_field_names"] == "true"
        assert request.headers["Authorization"] == "Token db-token"

    @pytest.mark.asyncio
    async def test_find_without_results_returns_empty_list(self):
        client = make_client(lambda request: httpx.Response(200, json={"count": 0, "results": []}))

        assert await client.find(711, {"Email__equal": "nobody@x.com"}) == []

    @pytest.mark.asyncio
    async def test_get_row_returns_row(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/database/rows/table/711/42/"
            return httpx.Response(200, json={"id": 42, "nome": "Ana"})

        assert await make_client(handler).get_row(711, 42) == {"id": 42, "nome": "Ana"}

    @pytest.mark.asyncio
    async def test_get_row_missing_returns_none(self):
        client = make_client(lambda request: httpx.Response(404, json={"error": "ERROR_ROW_DOES_NOT_EXIST"}))

        assert await client.get_row(711, 999) is None


class TestBaserowWrites:

    @pytest.mark.asyncio
    async def test_insert_posts_fields(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            assert json.loads(request.content) == {"nome": "Ana"}
            return httpx.Response(200, json={"id": 7, "nome": "Ana"})

        assert await make_client(handler).insert(711, {"nome": "Ana"}) == {"id": 7, "nome": "Ana"}

    @pytest.mark.asyncio
    async def test_update_patches_row(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "PATCH"
            assert request.url.path == "/api/database/rows/table/711/7/"
            assert json.loads(request.content) == {"google_refresh_token": None}
            return httpx.Response(200, json={"id": 7, "google_refresh_token": None})

        row = await make_client(handler).update(711, 7, {"google_refresh_token": None})

        assert row["google_refresh_token"] is None

    @pytest.mark.asyncio
    async def test_delete_accepts_no_content(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "DELETE"
            return httpx.Response(204)

        assert await make_client(handler).delete(709, 3) is None


class TestBaserowErrors:

    @pytest.mark.asyncio
    async def test_server_error_raises_row_store_error(self):
        client = make_client(lambda request: httpx.Response(500, text="upstream down"))

        with pytest.raises(RowStoreError) as exc_info:
            await client.insert(711, {"nome": "Ana"})

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_missing_row_on_update_is_an_error(self):
        client = make_client(lambda request: httpx.Response(404, json={"error": "ERROR_ROW_DOES_NOT_EXIST"}))

        with pytest.raises(RowStoreError):
            await client.update(711, 999, {"nome": "Ana"})

    @pytest.mark.asyncio
    async def test_network_error_raises_row_store_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(RowStoreError):
            await make_client(handler).find(711)
