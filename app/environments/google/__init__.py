"""
Google Environment Module - Google Workspace Integration

Architecture:
=============
google/
├── __init__.py           # Module exports
├── auth/                 # Shared OAuth authentication
│   ├── client.py         # Google OAuth implementation + request-scoped credentials
│   └── schemas.py        # Scopes and token responses
└── calendar/             # Google Calendar API
    ├── client.py         # Event creation
    └── schemas.py        # Event request/response structures

Usage:
======
    from app.environments.google import GoogleAuthClient, GoogleCalendarClient, CALENDAR_SCOPES

    # OAuth flow
    auth_client = GoogleAuthClient()
    auth_url = auth_client.get_authorization_url(scopes=CALENDAR_SCOPES, state=user_id)

    # After callback
    tokens = await auth_client.exchange_code_for_tokens(code)

    # Use Calendar API on the user's behalf
    calendar = GoogleCalendarClient(auth_client.credentials_for(tokens.refresh_token))
    created = await calendar.create_event(request)
"""

from app.environments.google.auth import (
    GoogleAuthClient,
    GoogleCredentials,
    CALENDAR_SCOPES,
)
from app.environments.google.calendar import GoogleCalendarClient

__all__ = [
    "GoogleAuthClient",
    "GoogleCredentials",
    "GoogleCalendarClient",
    "CALENDAR_SCOPES",
]
