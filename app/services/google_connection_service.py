"""
Google Connection Service - connect, callback, disconnect and status.

Connection state per user:

    [Disconnected] --connect()--> [PendingGrant] --callback(code)--> [Connected]
    [Connected] --disconnect()--> [Disconnected]
    [PendingGrant] --callback(no code / exchange failure)--> nothing persisted

"Connected" is not a stored flag; it is is_google_connected() applied to
the refresh token column of the user row.

The callback runs inside the popup Google redirected to. Whatever happens
there, the popup is just closed: handle_callback never raises. Failures are
reported through OAuthEventLogger with a correlation id instead.
"""

import logging
from typing import Any, Optional

from app.core.errors import InternalError, NotFoundError, ValidationError
from app.core.logging import OAuthEventLogger, new_correlation_id
from app.environments.base import ProviderAuthError, RowStoreError
from app.environments.google.auth import GoogleAuthClient
from app.environments.google.calendar import GoogleCalendarClient
from app.models.user import is_google_connected, parse_user_id
from app.repositories.user_repository import UserRepository


logger = logging.getLogger("gateway.services.google_connection")


class GoogleConnectionService:
    """
    Owns the lifecycle of a user's Google grant.

    Usage:
        service = GoogleConnectionService(users, GoogleAuthClient())
        url = service.generate_authorization_url("42")
        ...
        await service.handle_callback(code, state="42")
        assert await service.get_connection_status("42")
    """

    def __init__(
        self,
        users: UserRepository,
        auth_client: GoogleAuthClient,
        events: Optional[OAuthEventLogger] = None,
    ):
        self.users = users
        self.auth_client = auth_client
        self.events = events or OAuthEventLogger()

    def generate_authorization_url(self, user_id: Any) -> str:
        """
        Build the consent URL for a user.

        The user id is sent as the OAuth state so the callback knows whose
        grant it received without any server-side session. Consent is always
        forced because Google only returns a refresh token on (re)consent.

        Raises:
            ValidationError: user id missing
        """
        if user_id is None or str(user_id).strip() == "":
            raise ValidationError("userId is required")

        return self.auth_client.get_authorization_url(
            scopes=GoogleCalendarClient.required_scopes,
            state=str(user_id).strip(),
            access_type="offline",
            prompt="consent",
        )

    async def handle_callback(
        self,
        code: Optional[str],
        state: Optional[str],
        error: Optional[str] = None,
    ) -> bool:
        """
        Exchange the authorization code and store the refresh token.

        If Google returns no refresh token, the stored one is left as it is.

        Returns:
            True if a refresh token was stored. Never raises.
        """
        correlation_id = new_correlation_id()

        try:
            return await self._complete_grant(correlation_id, code, state, error)
        except Exception as e:
            self.events.log_failure(
                correlation_id, kind="unexpected_error", user_id=state, error=repr(e)
            )
            return False

    async def _complete_grant(
        self,
        correlation_id: str,
        code: Optional[str],
        state: Optional[str],
        error: Optional[str],
    ) -> bool:
        if error:
            self.events.log_failure(correlation_id, kind="consent_denied", user_id=state, error=error)
            return False

        if not code:
            logger.info(f"OAuth callback without code [{correlation_id}], closing popup")
            return False

        user_id = parse_user_id(state)
        if user_id is None:
            self.events.log_failure(correlation_id, kind="invalid_state", user_id=state)
            return False

        try:
            tokens = await self.auth_client.exchange_code_for_tokens(code)
        except ProviderAuthError as e:
            self.events.log_failure(
                correlation_id, kind="token_exchange_failed", user_id=state, error=str(e)
            )
            return False

        if not tokens.refresh_token:
            self.events.log_success(correlation_id, user_id=state, stored_refresh_token=False)
            return False

        try:
            await self.users.set_refresh_token(user_id, tokens.refresh_token)
        except Exception as e:
            self.events.log_failure(
                correlation_id, kind="persist_failed", user_id=state, error=repr(e)
            )
            return False

        self.events.log_success(correlation_id, user_id=state, stored_refresh_token=True)
        return True

    async def disconnect(self, user_id: Any) -> None:
        """
        Forget the user's grant. Disconnecting twice is fine.

        Raises:
            ValidationError: user id missing
            InternalError: row store failure
        """
        row_id = parse_user_id(user_id)
        if row_id is None:
            raise ValidationError("userId is required")

        try:
            await self.users.clear_refresh_token(row_id)
        except RowStoreError as e:
            raise InternalError("Could not disconnect Google account") from e

    async def get_connection_status(self, user_id: Any) -> bool:
        """
        Whether the user currently holds a Google grant.

        Raises:
            ValidationError: user id missing
            NotFoundError: no user with that id
            InternalError: row store failure
        """
        row_id = parse_user_id(user_id)
        if row_id is None:
            raise ValidationError("userId is required")

        try:
            user = await self.users.get_by_id(row_id)
        except RowStoreError as e:
            raise InternalError("Error checking connection status") from e

        if user is None:
            raise NotFoundError("User not found")

        return is_google_connected(user.google_refresh_token)
