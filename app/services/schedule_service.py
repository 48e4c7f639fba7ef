"""
Schedule Service - list a recruiter's interview appointments.

Appointment rows link to a candidate, and the candidate links to the
recruiter, so the lookup filters on that two-hop link.
"""

import logging
from typing import Any, List, Optional

from app.core.config import settings
from app.core.errors import InternalError, ValidationError
from app.environments.base import RowStoreError
from app.environments.baserow.client import BaserowClient, Row
from app.models.user import parse_user_id


logger = logging.getLogger("gateway.services.schedules")


class ScheduleService:
    def __init__(self, client: BaserowClient, table_id: Optional[int] = None):
        self._client = client
        self.table_id = table_id or settings.SCHEDULES_TABLE_ID

    async def list_for_user(self, user_id: Any) -> List[Row]:
        row_id = parse_user_id(user_id)
        if row_id is None:
            raise ValidationError("User id is required")

        try:
            return await self._client.find(
                self.table_id,
                {"Candidato__usuario__link_row_has": row_id},
            )
        except RowStoreError as e:
            logger.error(f"Failed to fetch schedules for user {row_id}: {e}")
            raise InternalError("Failed to fetch schedules") from e
