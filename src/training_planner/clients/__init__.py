"""HTTP clients for the Training Planner REST API."""

from .base import ApiClient
from .goals import GoalClient
from .workouts import WorkoutsClient

__all__ = [
    "ApiClient",
    "GoalClient",
    "WorkoutsClient",
]
