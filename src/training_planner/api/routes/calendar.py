"""Calendar API route: the user's workouts grouped by day."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..deps import CurrentUser, get_current_user, get_workout_service
from ...models.calendar import Calendar, CalendarQuery
from ...models.common import ApiResponse
from ...models.workouts import WorkoutStatus
from ...services.workout_service import WorkoutService

router = APIRouter()


@router.get("", response_model=ApiResponse[Calendar])
def get_calendar(
    start: date = Query(...),
    end: date = Query(...),
    status: Optional[WorkoutStatus] = Query(None),
    current_user: CurrentUser = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    """
    Workouts planned between start and end (inclusive), one entry per day
    that has any.

    Errors: 401, 422 (missing dates, or end before start).
    """
    query = CalendarQuery(start=start, end=end, status=status)
    return ApiResponse[Calendar](data=service.get_calendar(current_user.user_id, query))
