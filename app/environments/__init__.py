"""
Environments Module - External Service Integrations

Architecture Overview:
======================
environments/
├── __init__.py           # Module exports
├── base.py               # Shared exceptions, token dataclass, abstract bases
├── baserow/              # Row store (system of record)
│   └── client.py         # Generic per-table CRUD over Baserow's REST API
└── google/               # Google Workspace integration
    ├── auth/             # Google OAuth authentication
    │   ├── client.py     # OAuth flow + request-scoped credentials
    │   └── schemas.py    # Scopes and token responses
    └── calendar/         # Google Calendar API
        ├── client.py     # Event creation
        └── schemas.py    # Event request/response structures

Design Principles:
==================
1. Clients here only speak their provider's protocol; business rules live
   in app/services.
2. Every outbound request uses its own httpx.AsyncClient with an explicit
   timeout.
3. No client keeps per-user state between requests.
"""

from app.environments.base import (
    EnvironmentProvider,
    EnvironmentService,
    EnvironmentError,
    ProviderAuthError,
    TokenExpiredError,
    APIError,
    RowStoreError,
    OAuthTokens,
)

__all__ = [
    "EnvironmentProvider",
    "EnvironmentService",
    "EnvironmentError",
    "ProviderAuthError",
    "TokenExpiredError",
    "APIError",
    "RowStoreError",
    "OAuthTokens",
]
