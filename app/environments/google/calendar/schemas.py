"""
Google Calendar Schemas - Data structures for calendar operations.

Reference: https://developers.google.com/calendar/api/v3/reference/events/insert
"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field


class EventAttendee(BaseModel):
    """A person invited to a calendar event."""
    email: str = Field(..., description="Attendee's email address")
    display_name: Optional[str] = Field(None, description="Name shown in the invite")

    def to_api(self) -> dict:
        body = {"email": self.email}
        if self.display_name:
            body["displayName"] = self.display_name
        return body


class EventCreateRequest(BaseModel):
    """
    Request schema for creating a timed calendar event.

    Example:
        EventCreateRequest(
            summary="Interview: Ana Souza - Backend Developer",
            start_datetime=datetime(2025, 1, 15, 14, 0),
            end_datetime=datetime(2025, 1, 15, 15, 0),
            timezone="America/Sao_Paulo",
            attendees=[EventAttendee(email="ana@example.com")],
        )
    """
    summary: str = Field(..., description="Event title/summary")
    start_datetime: datetime = Field(..., description="Start time")
    end_datetime: datetime = Field(..., description="End time")
    timezone: str = Field(default="UTC", description="IANA timezone for the event")
    location: Optional[str] = Field(None, description="Event location")
    description: Optional[str] = Field(None, description="Event description")
    attendees: List[EventAttendee] = Field(default_factory=list)

    def is_valid(self) -> bool:
        """An event must end after it starts."""
        return self.end_datetime > self.start_datetime

    def to_api_body(self) -> dict:
        """Build the JSON body for events.insert."""
        body: dict = {
            "summary": self.summary,
            "start": {
                "dateTime": self.start_datetime.isoformat(),
                "timeZone": self.timezone,
            },
            "end": {
                "dateTime": self.end_datetime.isoformat(),
                "timeZone": self.timezone,
            },
        }
        if self.location:
            body["location"] = self.location
        if self.description:
            body["description"] = self.description
        if self.attendees:
            body["attendees"] = [attendee.to_api() for attendee in self.attendees]
        return body


class EventCreateResponse(BaseModel):
    """
    Response schema after creating a calendar event.

    Contains the key details of the created event.
    """
    event_id: str = Field(..., description="Google Calendar event ID")
    summary: str = Field(..., description="Event title/summary")
    start: datetime = Field(..., description="Event start time")
    end: datetime = Field(..., description="Event end time")
    html_link: str = Field("", description="Link to view event in Google Calendar")
    timezone: Optional[str] = Field(None, description="Event timezone")
