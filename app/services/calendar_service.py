"""
Calendar Service - put an interview on the recruiter's Google Calendar.

The one guard that matters here is the refresh token check: without a
stored grant the request is refused with AuthorizationRequiredError before
any Google endpoint is contacted. Otherwise the call would fail somewhere
inside the token refresh with a much less useful error.

Each call builds its own GoogleCredentials from the stored refresh token,
so no OAuth state is shared between requests. A single attempt is made;
the recruiter retries from the web app if it fails.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    Field,
    ValidationError as PydanticValidationError,
    model_validator,
)

from app.core.config import settings
from app.core.errors import (
    AuthorizationRequiredError,
    CalendarOperationError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from app.environments.base import EnvironmentError, RowStoreError
from app.environments.google.auth import GoogleAuthClient, GoogleCredentials
from app.environments.google.calendar import (
    EventAttendee,
    EventCreateRequest,
    EventCreateResponse,
    GoogleCalendarClient,
)
from app.models.user import is_google_connected, parse_user_id
from app.repositories.user_repository import UserRepository


logger = logging.getLogger("gateway.services.calendar")

DEFAULT_INTERVIEW_DURATION = timedelta(hours=1)


def _is_aware(value: datetime) -> bool:
    return value.utcoffset() is not None


class InterviewSlot(BaseModel):
    """The eventData part of a create-event request."""
    start: datetime = Field(validation_alias=AliasChoices("start", "startDateTime", "start_datetime"))
    end: Optional[datetime] = Field(
        None, validation_alias=AliasChoices("end", "endDateTime", "end_datetime")
    )
    title: Optional[str] = None
    details: Optional[str] = Field(None, validation_alias=AliasChoices("details", "description"))
    location: Optional[str] = None
    timezone: Optional[str] = Field(None, validation_alias=AliasChoices("timezone", "timeZone"))

    @model_validator(mode="after")
    def check_offset_awareness(self) -> "InterviewSlot":
        if self.end is not None and _is_aware(self.start) != _is_aware(self.end):
            raise ValueError("start and end must both include a UTC offset, or neither")
        return self


def _first(row: Dict[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = row.get(key)
        if value:
            return str(value)
    return None


def build_interview_request(
    slot: InterviewSlot,
    candidate: Dict[str, Any],
    job: Dict[str, Any],
) -> EventCreateRequest:
    """
    Turn the slot plus the candidate and job rows into an event request.

    Candidate and job come straight from Baserow, so both the Portuguese
    column titles (nome, titulo) and English keys are understood.
    """
    candidate_name = _first(candidate, "nome", "name") or "Candidate"
    job_title = _first(job, "titulo", "title")

    summary = slot.title or (
        f"Interview: {candidate_name} - {job_title}" if job_title else f"Interview: {candidate_name}"
    )

    description_lines = [line for line in (
        slot.details,
        f"Candidate: {candidate_name}",
        f"Phone: {candidate['telefone']}" if candidate.get("telefone") else None,
        f"Position: {job_title}" if job_title else None,
    ) if line]

    attendees = []
    candidate_email = _first(candidate, "email", "Email")
    if candidate_email:
        attendees.append(EventAttendee(email=candidate_email, display_name=candidate_name))

    return EventCreateRequest(
        summary=summary,
        start_datetime=slot.start,
        end_datetime=slot.end or slot.start + DEFAULT_INTERVIEW_DURATION,
        timezone=slot.timezone or settings.DEFAULT_TIMEZONE,
        location=slot.location,
        description="\n".join(description_lines),
        attendees=attendees,
    )


class CalendarService:
    """
    Creates calendar events on behalf of a user.

    Args:
        users: Repository used to read the stored refresh token
        auth_client: Turns a refresh token into request-scoped credentials
        calendar_client_factory: Builds the calendar client for those
            credentials (GoogleCalendarClient unless a test swaps it)
    """

    def __init__(
        self,
        users: UserRepository,
        auth_client: GoogleAuthClient,
        calendar_client_factory: Callable[[GoogleCredentials], GoogleCalendarClient] = GoogleCalendarClient,
    ):
        self.users = users
        self.auth_client = auth_client
        self.calendar_client_factory = calendar_client_factory

    async def create_event(
        self,
        user_id: Any,
        event_data: Optional[Dict[str, Any]],
        candidate: Optional[Dict[str, Any]],
        job: Optional[Dict[str, Any]],
    ) -> EventCreateResponse:
        """
        Create an interview event on the user's primary calendar.

        Raises:
            ValidationError: any argument missing, or eventData malformed
            NotFoundError: no user with that id
            AuthorizationRequiredError: user never connected Google (or disconnected)
            CalendarOperationError: Google refused the token or the event
        """
        row_id = parse_user_id(user_id)
        if row_id is None or not event_data or not candidate or not job:
            raise ValidationError("Insufficient data")

        try:
            slot = InterviewSlot.model_validate(event_data)
        except PydanticValidationError as e:
            raise ValidationError("Invalid event data") from e

        request = build_interview_request(slot, candidate, job)
        if not request.is_valid():
            raise ValidationError("Event end must be after its start")

        try:
            user = await self.users.get_by_id(row_id)
        except RowStoreError as e:
            raise InternalError("Failed to create event") from e

        if user is None:
            raise NotFoundError("User not found")

        if not is_google_connected(user.google_refresh_token):
            raise AuthorizationRequiredError("User is not connected to Google Calendar")

        credentials = self.auth_client.credentials_for(user.google_refresh_token)
        calendar = self.calendar_client_factory(credentials)

        try:
            created = await calendar.create_event(request)
        except (EnvironmentError, ValueError) as e:
            logger.error(f"Calendar event creation failed for user {row_id}: {e}")
            raise CalendarOperationError("Failed to create event") from e

        logger.info(f"Interview event {created.event_id} created for user {row_id}")
        return created
