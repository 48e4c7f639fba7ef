"""
Google Auth Router - OAuth 2.0 endpoints for Google Calendar integration.

Endpoints:
==========
- GET  /google/auth/connect?userId=   → authorization URL for the popup
- GET  /google/auth/callback          → Google redirects here; stores the grant
- POST /google/auth/disconnect        → forget the grant
- GET  /google/auth/status?userId=    → {"isConnected": bool}

OAuth Flow:
===========
1. Recruiter clicks "Connect Google Calendar" in the web app
2. Web app calls GET /google/auth/connect and opens the URL in a popup
3. Recruiter grants calendar access on Google's consent screen
4. Google redirects the popup to /google/auth/callback?code=...&state=<userId>
5. Backend exchanges the code and stores the refresh token on the user row
6. The callback page closes the popup; the web app re-checks /status

The callback always answers with the popup-closing page, even on failure.
Failures are only visible in the server logs (gateway.oauth).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import HTMLResponse

from app.core.errors import NotFoundError
from app.deps import get_google_connection_service
from app.schemas.google import ConnectResponse, ConnectionStatusResponse, DisconnectRequest
from app.schemas.user import MessageResponse
from app.services.google_connection_service import GoogleConnectionService


logger = logging.getLogger("gateway.routers.google_auth")

router = APIRouter(prefix="/google/auth", tags=["google-auth"])

CLOSE_POPUP_HTML = "<script>window.close();</script>"


@router.get("/connect", response_model=ConnectResponse)
async def google_connect(
    user_id: Optional[str] = Query(None, alias="userId", description="Gateway user id"),
    service: GoogleConnectionService = Depends(get_google_connection_service),
):
    """
    Build the Google consent URL for a user.

    Raises:
        400 Bad Request: userId missing
        503 Service Unavailable: Google OAuth credentials not configured
    """
    if not service.auth_client.is_configured:
        logger.error("Google OAuth not configured - missing client id/secret/redirect URI")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Google OAuth is not configured",
        )

    return ConnectResponse(url=service.generate_authorization_url(user_id))


@router.get("/callback", response_class=HTMLResponse)
async def google_callback(
    code: Optional[str] = Query(None, description="Authorization code from Google"),
    state: Optional[str] = Query(None, description="User id sent with the consent URL"),
    error: Optional[str] = Query(None, description="Error from Google"),
    service: GoogleConnectionService = Depends(get_google_connection_service),
):
    """Handle Google's redirect. Always returns the popup-closing page."""
    await service.handle_callback(code=code, state=state, error=error)
    return HTMLResponse(content=CLOSE_POPUP_HTML, status_code=status.HTTP_200_OK)


@router.post("/disconnect", response_model=MessageResponse)
async def google_disconnect(
    payload: DisconnectRequest,
    service: GoogleConnectionService = Depends(get_google_connection_service),
):
    """Remove the stored Google grant. Safe to call when already disconnected."""
    await service.disconnect(payload.user_id)
    return MessageResponse(message="Google account disconnected")


@router.get("/status", response_model=ConnectionStatusResponse)
async def google_connection_status(
    user_id: Optional[str] = Query(None, alias="userId", description="Gateway user id"),
    service: GoogleConnectionService = Depends(get_google_connection_service),
):
    """
    Check whether a user has connected their Google account.

    An unknown user id is reported as a 500 like any other lookup failure.
    """
    try:
        connected = await service.get_connection_status(user_id)
    except NotFoundError:
        logger.warning(f"Connection status requested for unknown user {user_id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error checking connection status",
        )

    return ConnectionStatusResponse(isConnected=connected)
