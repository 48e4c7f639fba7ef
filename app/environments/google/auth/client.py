"""
Google OAuth Client - Handles the OAuth 2.0 flow with Google APIs.

Key Features:
=============
1. Authorization URL generation (offline access, forced consent)
2. Code-to-token exchange
3. Access-token refresh from a stored refresh token
4. Request-scoped GoogleCredentials for API clients

OAuth 2.0 Flow Implementation:
==============================
1. get_authorization_url() → recruiter's browser opens Google in a popup
2. exchange_code_for_tokens() → called in the callback, yields the refresh token
3. credentials_for(refresh_token) → used later for every calendar call

GoogleAuthClient only holds the app's client id/secret/redirect URI, which
never change at runtime. Per-user tokens are never stored on it: each
calendar call gets its own GoogleCredentials value, so concurrent requests
for different users cannot see each other's tokens.

References:
===========
- OAuth 2.0: https://developers.google.com/identity/protocols/oauth2/web-server
- Token endpoint: https://oauth2.googleapis.com/token
"""

import logging
from typing import List, Optional
from urllib.parse import urlencode

import httpx

from app.core.config import settings
from app.environments.base import (
    EnvironmentProvider,
    OAuthTokens,
    ProviderAuthError,
    TokenExpiredError,
)
from app.environments.google.auth.schemas import GoogleAuthConfig, GoogleTokenResponse


logger = logging.getLogger("gateway.environments.google.auth")


class GoogleAuthClient(EnvironmentProvider):
    """
    Google OAuth 2.0 Client implementation.

    Example Usage:
        client = GoogleAuthClient()

        # Step 1: Generate auth URL, user id travels as state
        auth_url = client.get_authorization_url(scopes=CALENDAR_SCOPES, state="42")

        # Step 2: Handle callback
        tokens = await client.exchange_code_for_tokens(code="abc123")

        # Step 3: Later, act on the user's behalf
        credentials = client.credentials_for(stored_refresh_token)
        calendar = GoogleCalendarClient(credentials)
    """

    # Google OAuth endpoints
    AUTHORIZATION_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        redirect_uri: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Google OAuth client.

        Args:
            client_id: Google OAuth Client ID (defaults to settings)
            client_secret: Google OAuth Client Secret (defaults to settings)
            redirect_uri: OAuth callback URL (defaults to settings)
            timeout: Seconds before a token request is abandoned
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.config = GoogleAuthConfig(
            client_id=client_id or settings.GOOGLE_CLIENT_ID,
            client_secret=client_secret or settings.GOOGLE_CLIENT_SECRET,
            redirect_uri=redirect_uri or settings.GOOGLE_REDIRECT_URI,
        )
        self.timeout = timeout or settings.GOOGLE_REQUEST_TIMEOUT
        self._transport = transport

        if not self.config.is_complete():
            logger.warning(
                "Google OAuth not configured. Set GOOGLE_CLIENT_ID, "
                "GOOGLE_CLIENT_SECRET and GOOGLE_REDIRECT_URI in environment variables."
            )

    @property
    def is_configured(self) -> bool:
        return self.config.is_complete()

    @property
    def transport(self) -> Optional[httpx.AsyncBaseTransport]:
        return self._transport

    # -------------------------------------------------------------------------
    # AUTHORIZATION URL
    # -------------------------------------------------------------------------

    def get_authorization_url(
        self,
        scopes: List[str],
        state: str,
        redirect_uri: Optional[str] = None,
        access_type: str = "offline",
        prompt: str = "consent",
    ) -> str:
        """
        Generate the Google OAuth authorization URL.

        Args:
            scopes: List of OAuth scopes to request (e.g., CALENDAR_SCOPES)
            state: Value echoed back to the callback (the gateway's user id)
            redirect_uri: Override default callback URL
            access_type: "offline" for refresh token, "online" for access only
            prompt: "consent" forces the consent screen. Google only returns
                a refresh token on first consent or when consent is forced.

        Returns:
            Full authorization URL to open in the browser
        """
        params = {
            "client_id": self.config.client_id,
            "redirect_uri": redirect_uri or self.config.redirect_uri,
            "response_type": "code",
            "scope": " ".join(scopes),
            "state": state,
            "access_type": access_type,
            "prompt": prompt,
        }

        auth_url = f"{self.AUTHORIZATION_URL}?{urlencode(params)}"

        logger.info(
            f"Generated Google auth URL with {len(scopes)} scopes",
            extra={"scopes": scopes},
        )

        return auth_url

    # -------------------------------------------------------------------------
    # TOKEN ENDPOINT
    # -------------------------------------------------------------------------

    async def _post_token_request(self, data: dict) -> httpx.Response:
        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            return await client.post(self.TOKEN_URL, data=data)

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            error_data = response.json() if response.content else {}
        except ValueError:
            error_data = {}
        return error_data.get("error_description") or error_data.get("error") or response.text

    async def exchange_code_for_tokens(
        self,
        code: str,
        redirect_uri: Optional[str] = None,
    ) -> OAuthTokens:
        """
        Exchange authorization code for access and refresh tokens.

        Args:
            code: Authorization code from Google callback
            redirect_uri: Must match the redirect_uri used in authorization

        Returns:
            OAuthTokens; refresh_token may be None if Google did not reissue one

        Raises:
            ProviderAuthError: If token exchange fails
        """
        token_data = {
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "code": code,
            "grant_type": "authorization_code",
            "redirect_uri": redirect_uri or self.config.redirect_uri,
        }

        logger.info("Exchanging authorization code for tokens")

        try:
            response = await self._post_token_request(token_data)
        except httpx.RequestError as e:
            logger.error(f"Network error during token exchange: {e}")
            raise ProviderAuthError(f"Network error: {e}")

        if response.status_code != 200:
            error_msg = self._error_message(response)
            logger.error(f"Token exchange failed: {error_msg}")
            raise ProviderAuthError(f"Token exchange failed: {error_msg}")

        token_response = GoogleTokenResponse(**response.json())

        logger.info(
            "Successfully obtained Google tokens",
            extra={
                "has_refresh_token": token_response.refresh_token is not None,
            },
        )

        return OAuthTokens(
            access_token=token_response.access_token,
            refresh_token=token_response.refresh_token,
        )

    async def refresh_access_token(self, refresh_token: str) -> OAuthTokens:
        """
        Use refresh token to get a new access token.

        Raises:
            TokenExpiredError: If refresh token is invalid, revoked, or the
                token endpoint could not be reached
        """
        refresh_data = {
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
        }

        logger.info("Refreshing access token")

        try:
            response = await self._post_token_request(refresh_data)
        except httpx.RequestError as e:
            logger.error(f"Network error during token refresh: {e}")
            raise TokenExpiredError(f"Network error: {e}")

        if response.status_code != 200:
            error_msg = self._error_message(response)
            logger.error(f"Token refresh failed: {error_msg}")
            raise TokenExpiredError(f"Token refresh failed: {error_msg}")

        token_response = GoogleTokenResponse(**response.json())

        return OAuthTokens(
            access_token=token_response.access_token,
            refresh_token=token_response.refresh_token or refresh_token,
        )

    # -------------------------------------------------------------------------
    # REQUEST-SCOPED CREDENTIALS
    # -------------------------------------------------------------------------

    def credentials_for(self, refresh_token: str) -> "GoogleCredentials":
        """Build a fresh credentials value for one request."""
        return GoogleCredentials(refresh_token=refresh_token, auth_client=self)


class GoogleCredentials:
    """
    Authorization for a single user, valid for a single request.

    The access token is minted on first use and kept only on this object,
    which is discarded when the request finishes. It is never persisted.
    """

    def __init__(self, refresh_token: str, auth_client: GoogleAuthClient):
        self.refresh_token = refresh_token
        self._auth_client = auth_client
        self._tokens: Optional[OAuthTokens] = None

    @property
    def transport(self) -> Optional[httpx.AsyncBaseTransport]:
        return self._auth_client.transport

    async def get_access_token(self) -> str:
        """
        Return an access token, exchanging the refresh token on first call.

        Raises:
            TokenExpiredError: If Google rejects the refresh token
        """
        if self._tokens is None:
            self._tokens = await self._auth_client.refresh_access_token(self.refresh_token)
        return self._tokens.access_token
