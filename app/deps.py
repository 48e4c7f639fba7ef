"""
Dependencies module - reusable FastAPI dependencies for route handlers.

Builds the service graph for each request:

    BaserowClient ─┬─ UserRepository ─┬─ IdentityService
                   │                  ├─ GoogleConnectionService ─┐
                   │                  └─ CalendarService ─────────┤
                   └─ ScheduleService              GoogleAuthClient┘

The two external clients hold only configuration, so one instance of each
is shared by every request. Tests replace get_row_store and
get_google_auth_client through app.dependency_overrides.
"""

from functools import lru_cache

from fastapi import Depends

from app.environments.baserow.client import BaserowClient
from app.environments.google.auth import GoogleAuthClient
from app.repositories.user_repository import UserRepository
from app.services.calendar_service import CalendarService
from app.services.google_connection_service import GoogleConnectionService
from app.services.identity_service import IdentityService
from app.services.schedule_service import ScheduleService


@lru_cache
def get_row_store() -> BaserowClient:
    return BaserowClient()


@lru_cache
def get_google_auth_client() -> GoogleAuthClient:
    return GoogleAuthClient()


def get_user_repository(client: BaserowClient = Depends(get_row_store)) -> UserRepository:
    return UserRepository(client)


def get_identity_service(users: UserRepository = Depends(get_user_repository)) -> IdentityService:
    return IdentityService(users)


def get_google_connection_service(
    users: UserRepository = Depends(get_user_repository),
    auth_client: GoogleAuthClient = Depends(get_google_auth_client),
) -> GoogleConnectionService:
    return GoogleConnectionService(users, auth_client)


def get_calendar_service(
    users: UserRepository = Depends(get_user_repository),
    auth_client: GoogleAuthClient = Depends(get_google_auth_client),
) -> CalendarService:
    return CalendarService(users, auth_client)


def get_schedule_service(client: BaserowClient = Depends(get_row_store)) -> ScheduleService:
    return ScheduleService(client)
