"""User goal models."""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class GoalType(str, Enum):
    """Supported goal types. Only distance-by-date exists for now."""
    DISTANCE_BY_DATE = "distance_by_date"


class UserGoal(BaseModel):
    """A user's single training goal."""
    goal_type: GoalType
    target_distance_m: int
    due_date: date
    notes: Optional[str] = None


class UserGoalUpsertRequest(BaseModel):
    """Request body of PUT /api/v1/user-goal."""
    goal_type: GoalType
    target_distance_m: int = Field(..., ge=1, le=1_000_000)
    due_date: date
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("due_date")
    @classmethod
    def validate_due_date(cls, v: date) -> date:
        """Goals must be due today or later."""
        if v < datetime.now(timezone.utc).date():
            raise ValueError("due_date must be today or in the future")
        return v

    def to_row(self, user_id: str) -> dict:
        return {
            "user_id": user_id,
            "goal_type": self.goal_type.value,
            "target_distance_m": self.target_distance_m,
            "due_date": self.due_date.isoformat(),
            "notes": self.notes or None,
        }
