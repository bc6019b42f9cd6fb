"""Repository implementations over Supabase tables.

Keeps data access out of the services so they can be tested against
in-memory fakes.
"""

from .base import SupabaseRepository
from .goal_repository import GoalRepository
from .training_type_repository import TrainingTypeRepository
from .workout_repository import WorkoutRepository

__all__ = [
    "SupabaseRepository",
    "GoalRepository",
    "TrainingTypeRepository",
    "WorkoutRepository",
]
