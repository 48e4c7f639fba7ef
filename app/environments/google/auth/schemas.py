"""
Google OAuth Schemas - Data structures for Google authentication.

This module defines the data structures used in the Google OAuth flow.
Using Pydantic models ensures type safety and validation.
"""

from typing import Optional
from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# OAUTH SCOPE CONSTANTS
# ---------------------------------------------------------------------------
# Reference: https://developers.google.com/identity/protocols/oauth2/scopes

# Calendar scopes - create and edit events on the recruiter's calendars.
# The gateway never reads calendars, so calendar.events is all it asks for.
CALENDAR_SCOPES = [
    "https://www.googleapis.com/auth/calendar.events",
]


# ---------------------------------------------------------------------------
# CONFIGURATION
# ---------------------------------------------------------------------------

class GoogleAuthConfig(BaseModel):
    """
    Configuration for Google OAuth client.

    Loaded from Settings; is_complete() tells routers whether the OAuth
    endpoints can be served at all.
    """
    client_id: str = Field("", description="Google OAuth Client ID")
    client_secret: str = Field("", description="Google OAuth Client Secret")
    redirect_uri: str = Field("", description="OAuth callback URL")

    def is_complete(self) -> bool:
        return bool(self.client_id and self.client_secret and self.redirect_uri)


# ---------------------------------------------------------------------------
# TOKEN RESPONSES
# ---------------------------------------------------------------------------

class GoogleTokenResponse(BaseModel):
    """
    Response from Google's token endpoint.

    Example response from Google:
    {
        "access_token": "ya29.a0AfB_byC...",
        "expires_in": 3599,
        "refresh_token": "1//0eXyz...",
        "scope": "https://www.googleapis.com/auth/calendar.events",
        "token_type": "Bearer"
    }

    Only the two tokens are read; the other keys are ignored.
    refresh_token is only present on first consent or forced consent.
    """
    access_token: str = Field(..., description="OAuth access token")
    refresh_token: Optional[str] = Field(None, description="Refresh token for renewal")
