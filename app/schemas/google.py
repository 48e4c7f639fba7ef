"""
Google schemas - request/response bodies for the Google connection and
calendar endpoints.

The web app sends camelCase keys (userId, eventData); snake_case is accepted
too. As with the auth schemas, required fields are optional at this layer so
the services can answer a missing value with a 400.
"""

from typing import Any, Dict

from pydantic import AliasChoices, BaseModel, Field

from app.environments.google.calendar.schemas import EventCreateResponse


class DisconnectRequest(BaseModel):
    """Schema for POST /google/auth/disconnect."""
    user_id: int | str | None = Field(None, validation_alias=AliasChoices("userId", "user_id"))


class ConnectResponse(BaseModel):
    """Authorization URL the web app opens in a popup."""
    url: str


class ConnectionStatusResponse(BaseModel):
    # camelCase kept for the existing web app
    isConnected: bool


class CreateEventRequest(BaseModel):
    """
    Schema for POST /google/calendar/create-event.

    candidate and job are the Baserow rows the web app already holds;
    eventData carries the interview slot.

    Example request body:
    {
        "userId": 42,
        "eventData": {
            "start": "2025-01-15T14:00:00",
            "end": "2025-01-15T15:00:00",
            "details": "Second round"
        },
        "candidate": {"id": 7, "nome": "Ana Souza", "email": "ana@example.com"},
        "job": {"id": 3, "titulo": "Backend Developer"}
    }
    """
    user_id: int | str | None = Field(None, validation_alias=AliasChoices("userId", "user_id"))
    event_data: Dict[str, Any] | None = Field(
        None, validation_alias=AliasChoices("eventData", "event_data")
    )
    candidate: Dict[str, Any] | None = None
    job: Dict[str, Any] | None = None


class CreateEventResponse(BaseModel):
    success: bool = True
    message: str
    event: EventCreateResponse
