"""
Google Calendar Module - Calendar API Integration

Lets the gateway put interview events on a recruiter's Google Calendar
using the refresh token stored when they connected their account.
"""

from app.environments.google.calendar.client import GoogleCalendarClient
from app.environments.google.calendar.schemas import (
    EventAttendee,
    EventCreateRequest,
    EventCreateResponse,
)

__all__ = [
    "GoogleCalendarClient",
    "EventAttendee",
    "EventCreateRequest",
    "EventCreateResponse",
]
