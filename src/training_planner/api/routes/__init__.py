"""API routers."""

from . import calendar, training_types, user_goal, workouts

__all__ = ["calendar", "training_types", "user_goal", "workouts"]
