"""
Base classes and interfaces for external environment integrations.

The gateway talks to two external systems:
- Google (OAuth provider + Calendar API service)
- Baserow (the row store holding users, jobs, candidates and schedules)

This module defines the exceptions and data structures those clients share,
plus the abstract contracts the Google provider and its services implement.

Services in app/services catch these provider-level exceptions and translate
them into the gateway error taxonomy (app/core/errors.py). Nothing in this
module knows about HTTP status codes of *our* API.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, List, Any


# ---------------------------------------------------------------------------
# CUSTOM EXCEPTIONS
# ---------------------------------------------------------------------------


class EnvironmentError(Exception):
    """Base exception for all environment-related errors."""
    pass


class ProviderAuthError(EnvironmentError):
    """Raised when an OAuth exchange with a provider fails."""
    pass


class TokenExpiredError(EnvironmentError):
    """Raised when a refresh token was rejected (revoked or expired)."""
    pass


class APIError(EnvironmentError):
    """Raised when an API call to the provider fails."""

    def __init__(self, message: str, status_code: Optional[int] = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class RowStoreError(APIError):
    """Raised when a Baserow request fails."""
    pass


# ---------------------------------------------------------------------------
# DATA STRUCTURES
# ---------------------------------------------------------------------------


@dataclass
class OAuthTokens:
    """
    Standardized token data from an OAuth provider.

    refresh_token is only present on first consent or when consent was
    forced with prompt=consent.
    """
    access_token: str
    refresh_token: Optional[str] = None


# ---------------------------------------------------------------------------
# ABSTRACT BASE CLASSES
# ---------------------------------------------------------------------------


class EnvironmentProvider(ABC):
    """
    Abstract base class for OAuth providers.

    The provider is responsible for:
    - Generating authorization URLs
    - Exchanging authorization codes for tokens
    - Refreshing access tokens from a stored refresh token
    """

    @abstractmethod
    def get_authorization_url(
        self,
        scopes: List[str],
        state: str,
        redirect_uri: Optional[str] = None,
    ) -> str:
        """
        Generate the OAuth authorization URL.

        Args:
            scopes: List of OAuth scopes to request
            state: Opaque value echoed back in the callback
            redirect_uri: Override the default redirect URI
        """
        pass

    @abstractmethod
    async def exchange_code_for_tokens(
        self,
        code: str,
        redirect_uri: Optional[str] = None,
    ) -> OAuthTokens:
        """
        Exchange authorization code for access/refresh tokens.

        Raises:
            ProviderAuthError: If code exchange fails
        """
        pass

    @abstractmethod
    async def refresh_access_token(self, refresh_token: str) -> OAuthTokens:
        """
        Use refresh token to get a new access token.

        Raises:
            TokenExpiredError: If refresh token is invalid/expired
        """
        pass


class EnvironmentService(ABC):
    """
    Abstract base class for API services within a provider.

    Each service (Calendar, ...) declares the scopes it needs so the
    authorization URL can request exactly those.
    """

    # OAuth scopes required for this service to function
    required_scopes: List[str] = []
