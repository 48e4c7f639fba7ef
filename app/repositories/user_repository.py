"""
User Repository.

Credential store adapter over the Baserow users table. It is also where
the Google grant lives: the refresh token is a column on the user row,
there is no separate token table.

No delete() method: this service never removes accounts.
"""

import logging
from typing import Optional

from app.core.config import settings
from app.environments.baserow.client import BaserowClient
from app.models.user import User, normalize_email


logger = logging.getLogger("gateway.repositories.users")


class UserRepository:
    """Data access layer for User entities."""

    def __init__(self, client: BaserowClient, table_id: Optional[int] = None) -> None:
        self._client = client
        self.table_id = table_id or settings.USERS_TABLE_ID

    # -------------------------------------------------------------------------
    # READS
    # -------------------------------------------------------------------------

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Look up a user by email (normalized before the query).

        Baserow ignores a filter with an empty value, so a blank email
        would match every row; it is answered with None instead.
        """
        normalized = normalize_email(email)
        if not normalized:
            return None
        rows = await self._client.find(self.table_id, {"Email__equal": normalized})
        return User.from_row(rows[0]) if rows else None

    async def get_by_id(self, user_id: int) -> Optional[User]:
        row = await self._client.get_row(self.table_id, user_id)
        return User.from_row(row) if row else None

    # -------------------------------------------------------------------------
    # WRITES
    # -------------------------------------------------------------------------

    async def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        company: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> User:
        fields = User.to_row(
            name=name,
            company=company,
            phone=phone,
            email=normalize_email(email),
            password_hash=password_hash,
        )
        row = await self._client.insert(self.table_id, fields)
        logger.info(f"Created user {row.get('id')}")
        return User.from_row(row)

    async def update(self, user_id: int, **fields) -> User:
        """Partially update a user; only the given attributes are written."""
        row = await self._client.update(self.table_id, user_id, User.to_row(**fields))
        return User.from_row(row)

    # -------------------------------------------------------------------------
    # GOOGLE GRANT
    # -------------------------------------------------------------------------

    async def set_refresh_token(self, user_id: int, refresh_token: str) -> None:
        await self.update(user_id, google_refresh_token=refresh_token)
        logger.info(f"Stored Google refresh token for user {user_id}")

    async def clear_refresh_token(self, user_id: int) -> None:
        await self.update(user_id, google_refresh_token=None)
        logger.info(f"Cleared Google refresh token for user {user_id}")
