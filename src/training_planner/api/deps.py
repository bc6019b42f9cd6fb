"""Dependency injection for API routes."""

from fastapi import Depends
from supabase import Client

from ..db.client import get_supabase_client
from ..db.repositories import GoalRepository, TrainingTypeRepository, WorkoutRepository
from ..services import GoalService, TrainingTypeService, WorkoutService
from .auth import CurrentUser, get_current_user

__all__ = [
    "CurrentUser",
    "get_current_user",
    "get_goal_service",
    "get_training_type_service",
    "get_workout_service",
]


def get_workout_service(client: Client = Depends(get_supabase_client)) -> WorkoutService:
    """Get the workout service bound to the shared Supabase client."""
    return WorkoutService(
        workouts=WorkoutRepository(client),
        training_types=TrainingTypeRepository(client),
    )


def get_goal_service(client: Client = Depends(get_supabase_client)) -> GoalService:
    """Get the goal service bound to the shared Supabase client."""
    return GoalService(GoalRepository(client))


def get_training_type_service(client: Client = Depends(get_supabase_client)) -> TrainingTypeService:
    """Get the training type service bound to the shared Supabase client."""
    return TrainingTypeService(TrainingTypeRepository(client))
