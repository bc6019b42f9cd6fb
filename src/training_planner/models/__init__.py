"""Data models for the Training Planner."""

from .onboarding import (
    TOTAL_STEPS,
    DurationInput,
    OnboardingSession,
    OnboardingState,
    WorkoutEntryDraft,
    WorkoutFormErrors,
    WorkoutPersistCommand,
)
from .common import ApiListResponse, ApiResponse
from .workouts import (
    CompleteWorkoutRequest,
    CreateWorkoutRequest,
    RateWorkoutRequest,
    StepPart,
    UpdateWorkoutRequest,
    WorkoutDetail,
    WorkoutLast3Item,
    WorkoutListFilters,
    WorkoutOrigin,
    WorkoutRating,
    WorkoutStatus,
    WorkoutStepInput,
    WorkoutSummary,
)
from .calendar import Calendar, CalendarDay, CalendarQuery, CalendarWorkoutItem
from .goals import GoalType, UserGoal, UserGoalUpsertRequest
from .training_types import TrainingType

__all__ = [
    # Onboarding
    "TOTAL_STEPS",
    "DurationInput",
    "OnboardingSession",
    "OnboardingState",
    "WorkoutEntryDraft",
    "WorkoutFormErrors",
    "WorkoutPersistCommand",
    # Workouts
    "ApiListResponse",
    "ApiResponse",
    "CompleteWorkoutRequest",
    "CreateWorkoutRequest",
    "RateWorkoutRequest",
    "StepPart",
    "UpdateWorkoutRequest",
    "WorkoutDetail",
    "WorkoutLast3Item",
    "WorkoutListFilters",
    "WorkoutOrigin",
    "WorkoutRating",
    "WorkoutStatus",
    "WorkoutStepInput",
    "WorkoutSummary",
    # Calendar
    "Calendar",
    "CalendarDay",
    "CalendarQuery",
    "CalendarWorkoutItem",
    # Goals
    "GoalType",
    "UserGoal",
    "UserGoalUpsertRequest",
    # Training types
    "TrainingType",
]
