"""Business services for the Training Planner API."""

from .goal_service import GoalService
from .training_type_service import TrainingTypeService
from .workout_service import WorkoutService

__all__ = [
    "GoalService",
    "TrainingTypeService",
    "WorkoutService",
]
