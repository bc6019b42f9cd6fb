"""
Workout API routes.

Provides endpoints for:
- Creating a workout, planned or already completed (used by onboarding)
- Listing workouts with filters, sorting and pagination
- Listing the last three completed workouts
- Reading, updating and deleting one workout
- Lifecycle actions: complete, skip, cancel, rate
"""

import logging
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from ..deps import CurrentUser, get_current_user, get_workout_service
from ...models.common import ApiListResponse, ApiResponse
from ...models.workouts import (
    CompleteWorkoutRequest,
    CreateWorkoutRequest,
    RateWorkoutRequest,
    UpdateWorkoutRequest,
    WorkoutDetail,
    WorkoutLast3Item,
    WorkoutListFilters,
    WorkoutOrigin,
    WorkoutRating,
    WorkoutStatus,
    WorkoutSummary,
)
from ...services.workout_service import WorkoutService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ApiResponse[WorkoutDetail], status_code=201)
def create_workout(
    request: CreateWorkoutRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    """
    Create a workout.

    A completed workout carries distance_m, duration_s, avg_hr_bpm and
    completed_at in addition to the plan.

    Errors: 401, 404 (unknown training_type_code), 409 (duplicate
    position), 422 (invalid body).
    """
    workout = service.create_workout(current_user.user_id, request)
    return ApiResponse[WorkoutDetail](data=workout)


@router.get("", response_model=ApiListResponse[WorkoutSummary])
def list_workouts(
    status: Optional[WorkoutStatus] = Query(None),
    training_type_code: Optional[str] = Query(None, description="Comma-separated codes"),
    origin: Optional[WorkoutOrigin] = Query(None),
    rating: Optional[WorkoutRating] = Query(None),
    planned_date_gte: Optional[date] = Query(None),
    planned_date_lte: Optional[date] = Query(None),
    completed_at_gte: Optional[datetime] = Query(None),
    completed_at_lte: Optional[datetime] = Query(None),
    sort: Optional[str] = Query(None, description="e.g. planned_date:asc,position:asc"),
    page: int = Query(1),
    per_page: int = Query(20),
    current_user: CurrentUser = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    """
    List the user's workouts.

    Defaults to planned_date then position ascending, or completed_at
    descending when filtering by status=completed.

    Errors: 401, 422 (bad filter, sort or pagination).
    """
    filters = WorkoutListFilters(
        status=status,
        training_type_codes=training_type_code,
        origin=origin,
        rating=rating,
        planned_date_gte=planned_date_gte,
        planned_date_lte=planned_date_lte,
        completed_at_gte=completed_at_gte,
        completed_at_lte=completed_at_lte,
        sort=sort,
        page=page,
        per_page=per_page,
    )
    items, total = service.list_workouts(current_user.user_id, filters)
    return ApiListResponse[WorkoutSummary](
        data=items,
        page=filters.page,
        per_page=filters.per_page,
        total=total,
    )


@router.get("/last3", response_model=ApiListResponse[WorkoutLast3Item])
def get_last_three_workouts(
    training_type_code: Optional[str] = Query(None, max_length=50),
    current_user: CurrentUser = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    """Last three completed workouts, newest first, optionally of one type."""
    items = service.get_last_three(current_user.user_id, training_type_code)
    return ApiListResponse[WorkoutLast3Item](
        data=items,
        page=1,
        per_page=3,
        total=len(items),
    )


@router.get("/{workout_id}", response_model=ApiResponse[WorkoutDetail])
def get_workout(
    workout_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    """Errors: 401, 404."""
    workout = service.get_workout(current_user.user_id, workout_id)
    return ApiResponse[WorkoutDetail](data=workout)


@router.patch("/{workout_id}", response_model=ApiResponse[WorkoutDetail])
def update_workout(
    workout_id: str,
    request: UpdateWorkoutRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    """
    Update some fields of a workout.

    Errors: 401, 404, 422 (invalid or unknown field).
    """
    workout = service.update_workout(current_user.user_id, workout_id, request)
    return ApiResponse[WorkoutDetail](data=workout)


@router.delete("/{workout_id}", status_code=204)
def delete_workout(
    workout_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    """Errors: 401, 404, 409 (still referenced)."""
    service.delete_workout(current_user.user_id, workout_id)
    return Response(status_code=204)


@router.post("/{workout_id}/complete", response_model=ApiResponse[WorkoutDetail])
def complete_workout(
    workout_id: str,
    request: CompleteWorkoutRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    """
    Record the actual metrics and mark the workout completed.

    Errors: 401, 404, 409 (already completed), 422.
    """
    workout = service.complete_workout(current_user.user_id, workout_id, request)
    return ApiResponse[WorkoutDetail](data=workout)


@router.post("/{workout_id}/skip", response_model=ApiResponse[WorkoutDetail])
def skip_workout(
    workout_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    """Errors: 401, 404, 409 (already skipped)."""
    workout = service.skip_workout(current_user.user_id, workout_id)
    return ApiResponse[WorkoutDetail](data=workout)


@router.post("/{workout_id}/cancel", response_model=ApiResponse[WorkoutDetail])
def cancel_workout(
    workout_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    """Errors: 401, 404, 409 (already canceled)."""
    workout = service.cancel_workout(current_user.user_id, workout_id)
    return ApiResponse[WorkoutDetail](data=workout)


@router.post("/{workout_id}/rate", response_model=ApiResponse[WorkoutDetail])
def rate_workout(
    workout_id: str,
    request: RateWorkoutRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    """Errors: 401, 404, 409 (not completed), 422."""
    workout = service.rate_workout(current_user.user_id, workout_id, request)
    return ApiResponse[WorkoutDetail](data=workout)
