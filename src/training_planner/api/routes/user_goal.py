"""
User goal API routes.

Each user has at most one goal; PUT creates or replaces it.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response

from ..deps import CurrentUser, get_current_user, get_goal_service
from ...models.goals import UserGoal, UserGoalUpsertRequest
from ...models.common import ApiResponse
from ...services.goal_service import GoalService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=ApiResponse[Optional[UserGoal]])
def get_user_goal(
    current_user: CurrentUser = Depends(get_current_user),
    service: GoalService = Depends(get_goal_service),
):
    """Current goal, or ``{"data": null}`` when none is set."""
    return ApiResponse[Optional[UserGoal]](data=service.get_goal(current_user.user_id))


@router.put("", response_model=ApiResponse[UserGoal])
def upsert_user_goal(
    request: UserGoalUpsertRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: GoalService = Depends(get_goal_service),
):
    """Create or replace the goal. Always 200, since it may be an update."""
    goal = service.upsert_goal(current_user.user_id, request)
    return ApiResponse[UserGoal](data=goal)


@router.delete("", status_code=204)
def delete_user_goal(
    current_user: CurrentUser = Depends(get_current_user),
    service: GoalService = Depends(get_goal_service),
):
    """Delete the goal; 404 when there is none."""
    service.delete_goal(current_user.user_id)
    return Response(status_code=204)
