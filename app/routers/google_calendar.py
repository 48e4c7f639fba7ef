"""
Google Calendar router - schedule an interview on the recruiter's calendar.
"""

from fastapi import APIRouter, Depends

from app.deps import get_calendar_service
from app.schemas.google import CreateEventRequest, CreateEventResponse
from app.services.calendar_service import CalendarService

router = APIRouter(prefix="/google/calendar", tags=["google-calendar"])


@router.post("/create-event", response_model=CreateEventResponse)
async def create_event(
    payload: CreateEventRequest,
    calendar: CalendarService = Depends(get_calendar_service),
):
    """
    Create an interview event.

    Raises:
        400 Bad Request: userId, eventData, candidate or job missing
        401 Unauthorized: user has not connected Google Calendar
        500 Internal Server Error: Google rejected the request
    """
    event = await calendar.create_event(
        user_id=payload.user_id,
        event_data=payload.event_data,
        candidate=payload.candidate,
        job=payload.job,
    )
    return CreateEventResponse(message="Event created successfully", event=event)
