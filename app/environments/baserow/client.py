"""
Baserow Client - generic row operations against the hosted row store.

Baserow is the system of record for users, jobs, candidates and schedules.
Every table is addressed by its numeric table id and rows are loosely-typed
dicts keyed by the table's "user field names" (the column titles shown in
the Baserow UI), which is why every request sends user_field_names=true.

API Reference:
==============
- List rows:   GET    /api/database/rows/table/{table_id}/
- Get row:     GET    /api/database/rows/table/{table_id}/{row_id}/
- Create row:  POST   /api/database/rows/table/{table_id}/
- Update row:  PATCH  /api/database/rows/table/{table_id}/{row_id}/
- Delete row:  DELETE /api/database/rows/table/{table_id}/{row_id}/

Filters use Baserow's query-string syntax, filter__<field>__<type>=<value>.
find() takes them as a mapping without the "filter__" prefix:

    rows = await client.find(711, {"Email__equal": "a@x.com"})
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from app.core.config import settings
from app.environments.base import RowStoreError


logger = logging.getLogger("gateway.environments.baserow")

Row = Dict[str, Any]


class BaserowClient:
    """
    Stateless async client for the Baserow REST API.

    A new httpx.AsyncClient is opened per call, so one instance can be
    shared by concurrent requests.

    Attributes:
        base_url: Baserow instance URL without trailing slash
        token: Database token
        timeout: Seconds before a request is abandoned
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.BASEROW_API_URL).rstrip("/")
        self.token = token if token is not None else settings.BASEROW_API_TOKEN
        self.timeout = timeout or settings.ROW_STORE_TIMEOUT
        self._transport = transport

        if not self.token:
            logger.warning("Baserow not configured. Set BASEROW_API_TOKEN in environment variables.")

    # -------------------------------------------------------------------------
    # HTTP PLUMBING
    # -------------------------------------------------------------------------

    def _get_headers(self) -> dict:
        return {
            "Authorization": f"Token {self.token}",
            "Accept": "application/json",
        }

    def _table_url(self, table_id: int, row_id: Optional[int] = None) -> str:
        url = f"{self.base_url}/api/database/rows/table/{table_id}/"
        if row_id is not None:
            url += f"{row_id}/"
        return url

    async def _request(
        self,
        method: str,
        url: str,
        params: Optional[dict] = None,
        json_body: Optional[dict] = None,
        allow_not_found: bool = False,
    ) -> Optional[Any]:
        """
        Make an authenticated request to Baserow.

        Returns:
            Parsed JSON body, None for 204 responses, or None for 404 when
            allow_not_found is set.

        Raises:
            RowStoreError: On network failures and unexpected status codes
        """
        query = {"user_field_names": "true"}
        if params:
            query.update(params)

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=self._get_headers(),
                    params=query,
                    json=json_body,
                )
            except httpx.RequestError as e:
                logger.error(f"Network error in Baserow API: {e}")
                raise RowStoreError(f"Network error: {e}")

        if response.status_code == 404 and allow_not_found:
            return None

        if response.status_code == 204:
            return None

        if response.status_code not in (200, 201):
            error_detail = response.text
            logger.error(f"Baserow API error: {method} {url} -> {response.status_code} - {error_detail}")
            raise RowStoreError(
                f"Row store request failed with status {response.status_code}",
                status_code=response.status_code,
                response=error_detail,
            )

        return response.json()

    # -------------------------------------------------------------------------
    # ROW OPERATIONS
    # -------------------------------------------------------------------------

    async def find(self, table_id: int, filters: Optional[Dict[str, Any]] = None) -> List[Row]:
        """
        List rows of a table matching all given filters.

        Args:
            table_id: Baserow table id
            filters: {"<field>__<type>": value}, e.g. {"Email__equal": "a@x.com"}

        Returns:
            The "results" page of matching rows (possibly empty)
        """
        params = {f"filter__{key}": str(value) for key, value in (filters or {}).items()}
        data = await self._request("GET", self._table_url(table_id), params=params)
        return (data or {}).get("results") or []

    async def get_row(self, table_id: int, row_id: int) -> Optional[Row]:
        """Fetch one row by id. Returns None if the row does not exist."""
        return await self._request("GET", self._table_url(table_id, row_id), allow_not_found=True)

    async def insert(self, table_id: int, fields: Row) -> Row:
        """Create a row and return it as stored (including its new id)."""
        return await self._request("POST", self._table_url(table_id), json_body=fields)

    async def update(self, table_id: int, row_id: int, fields: Row) -> Row:
        """Partially update a row; fields not given are left untouched."""
        return await self._request("PATCH", self._table_url(table_id, row_id), json_body=fields)

    async def delete(self, table_id: int, row_id: int) -> None:
        await self._request("DELETE", self._table_url(table_id, row_id))
