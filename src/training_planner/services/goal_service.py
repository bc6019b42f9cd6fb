"""Goal service: one goal per user, replaced on save."""

import logging
from typing import Optional

from ..db.repositories import GoalRepository
from ..exceptions import GoalNotFoundError
from ..models.goals import UserGoal, UserGoalUpsertRequest

logger = logging.getLogger(__name__)


class GoalService:
    def __init__(self, goals: GoalRepository):
        self.goals = goals

    def get_goal(self, user_id: str) -> Optional[UserGoal]:
        row = self.goals.get(user_id)
        return UserGoal.model_validate(row) if row else None

    def upsert_goal(self, user_id: str, request: UserGoalUpsertRequest) -> UserGoal:
        """Create the goal, or replace the existing one atomically."""
        row = self.goals.upsert(request.to_row(user_id))
        logger.info(f"Upserted goal for user {user_id}")
        return UserGoal.model_validate(row)

    def delete_goal(self, user_id: str) -> None:
        """
        Delete the user's goal.

        Raises:
            GoalNotFoundError: If the user has no goal.
        """
        if not self.goals.exists(user_id):
            raise GoalNotFoundError(user_id)
        self.goals.delete(user_id)
        logger.info(f"Deleted goal for user {user_id}")
