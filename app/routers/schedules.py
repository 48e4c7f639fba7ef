"""
Schedules router - appointment rows for a recruiter.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from app.deps import get_schedule_service
from app.services.schedule_service import ScheduleService

router = APIRouter(prefix="/schedules", tags=["schedules"])


@router.get("/{user_id}")
async def list_schedules(
    user_id: str,
    schedules: ScheduleService = Depends(get_schedule_service),
) -> Dict[str, Any]:
    results: List[Dict[str, Any]] = await schedules.list_for_user(user_id)
    return {"success": True, "results": results}
