"""
Google Auth Module - OAuth 2.0 Authentication for Google Services

OAuth 2.0 Flow Overview:
========================
1. Recruiter clicks "Connect Google Calendar" in the web app
2. Backend generates authorization URL; the user id travels as `state`
3. Google's consent screen opens in a popup
4. Google redirects to the callback with an authorization code
5. Backend exchanges the code and stores the refresh token on the user row
6. The popup closes itself

Later, calendar actions turn the stored refresh token into a short-lived
access token through GoogleCredentials.
"""

from app.environments.google.auth.client import GoogleAuthClient, GoogleCredentials
from app.environments.google.auth.schemas import (
    GoogleAuthConfig,
    GoogleTokenResponse,
    CALENDAR_SCOPES,
)

__all__ = [
    "GoogleAuthClient",
    "GoogleCredentials",
    "GoogleAuthConfig",
    "GoogleTokenResponse",
    "CALENDAR_SCOPES",
]
