"""
Google Calendar API Client - create interview events.

API Reference:
==============
- Events API: https://developers.google.com/calendar/api/v3/reference/events

Usage Example:
==============
    from app.environments.google.calendar import GoogleCalendarClient

    credentials = auth_client.credentials_for(user.google_refresh_token)
    client = GoogleCalendarClient(credentials)
    created = await client.create_event(request)
    print(created.html_link)

The client is built per request from request-scoped credentials; the
access token is fetched on the first API call.
"""

import logging
from datetime import datetime
from typing import Optional

import httpx

from app.core.config import settings
from app.environments.base import EnvironmentService, APIError
from app.environments.google.auth.client import GoogleCredentials
from app.environments.google.auth.schemas import CALENDAR_SCOPES
from app.environments.google.calendar.schemas import EventCreateRequest, EventCreateResponse


logger = logging.getLogger("gateway.environments.google.calendar")


class GoogleCalendarClient(EnvironmentService):
    """
    Google Calendar API client.

    Attributes:
        credentials: Request-scoped Google credentials for one user
    """

    required_scopes = CALENDAR_SCOPES

    BASE_URL = "https://www.googleapis.com/calendar/v3"

    def __init__(self, credentials: GoogleCredentials, timeout: Optional[float] = None):
        self.credentials = credentials
        self.timeout = timeout or settings.GOOGLE_REQUEST_TIMEOUT

    # -------------------------------------------------------------------------
    # HTTP CLIENT MANAGEMENT
    # -------------------------------------------------------------------------

    async def _get_headers(self) -> dict:
        """Get authorization headers, minting the access token if needed."""
        access_token = await self.credentials.get_access_token()
        return {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json",
        }

    async def _make_post_request(
        self,
        endpoint: str,
        json_body: dict,
        params: Optional[dict] = None,
    ) -> dict:
        """
        Make an authenticated POST request to the Calendar API.

        Raises:
            APIError: If the request fails
            TokenExpiredError: If the refresh token was rejected
        """
        url = f"{self.BASE_URL}{endpoint}"
        headers = await self._get_headers()

        async with httpx.AsyncClient(transport=self.credentials.transport, timeout=self.timeout) as client:
            try:
                response = await client.post(
                    url=url,
                    headers=headers,
                    json=json_body,
                    params=params,
                )
            except httpx.RequestError as e:
                logger.error(f"Network error in Calendar API: {e}")
                raise APIError(f"Network error: {e}")

        if response.status_code == 401:
            logger.error("Calendar API: Unauthorized (token may be expired)")
            raise APIError(
                "Unauthorized - access token may be expired",
                status_code=401,
                response=response.text,
            )

        if response.status_code == 403:
            logger.error("Calendar API: Forbidden (write scope may be missing)")
            raise APIError(
                "Forbidden - calendar write scope may not be granted",
                status_code=403,
                response=response.text,
            )

        if response.status_code not in (200, 201):
            error_detail = response.text
            logger.error(f"Calendar API error: {response.status_code} - {error_detail}")
            raise APIError(
                f"API request failed: {error_detail}",
                status_code=response.status_code,
                response=error_detail,
            )

        return response.json()

    # -------------------------------------------------------------------------
    # EVENT CREATION
    # -------------------------------------------------------------------------

    async def create_event(
        self,
        request: EventCreateRequest,
        calendar_id: str = "primary",
        send_updates: str = "all",
    ) -> EventCreateResponse:
        """
        Create a timed calendar event.

        Args:
            request: EventCreateRequest with event details
            calendar_id: Calendar identifier (default: "primary")
            send_updates: "all" emails invitations to attendees, "none" doesn't

        Returns:
            EventCreateResponse with created event details

        Raises:
            ValueError: If the event ends before it starts
            APIError: If event creation fails
            TokenExpiredError: If the stored refresh token is no longer valid
        """
        if not request.is_valid():
            raise ValueError("Event end must be after its start")

        logger.info(
            "Creating calendar event",
            extra={
                "summary": request.summary,
                "calendar_id": calendar_id,
                "attendees": len(request.attendees),
            },
        )

        response_data = await self._make_post_request(
            endpoint=f"/calendars/{calendar_id}/events",
            json_body=request.to_api_body(),
            params={"sendUpdates": send_updates},
        )

        created_event = self._parse_create_response(response_data, request)

        logger.info(f"Created event: {created_event.event_id}")

        return created_event

    def _parse_create_response(
        self,
        response_data: dict,
        request: EventCreateRequest,
    ) -> EventCreateResponse:
        """Parse the API response into an EventCreateResponse."""
        start_data = response_data.get("start", {})
        end_data = response_data.get("end", {})

        if "dateTime" in start_data:
            start = datetime.fromisoformat(start_data["dateTime"].replace("Z", "+00:00"))
        else:
            start = request.start_datetime

        if "dateTime" in end_data:
            end = datetime.fromisoformat(end_data["dateTime"].replace("Z", "+00:00"))
        else:
            end = request.end_datetime

        return EventCreateResponse(
            event_id=response_data.get("id", ""),
            summary=response_data.get("summary", request.summary),
            start=start,
            end=end,
            html_link=response_data.get("htmlLink", ""),
            timezone=start_data.get("timeZone") or request.timezone,
        )
